"""Constants and small helpers shared by the test modules and conftest.py."""

from __future__ import annotations

import threading

TEST_RATE = 1_000
"""Sample rate of every generated fixture file."""

RAMP_FRAMES = 3_000
"""Frames in the ramp fixture: 3.0 s at TEST_RATE."""


def at_frame(k: int, rate: int = TEST_RATE) -> float:
    """Time in the middle of frame `k`, so floor(t * rate) is exactly k."""
    return (k + 0.5) / rate


def ramp_value(k: int) -> float:
    """Decoded float value of frame `k` in the ramp fixture."""
    return k / 32768.0


class FakeDevice:
    """Stands in for sounddevice.RawOutputStream; records every call."""

    def __init__(self, sample_rate: int, channels: int, gate: threading.Event | None = None,
                 fail_on_write: bool = False) -> None:
        self.sample_rate   = sample_rate
        self.channels      = channels
        self.writes: list[bytes] = []
        self.calls: list[str]    = []
        self.entered_write = threading.Event()
        self._gate         = gate
        self._fail         = fail_on_write

    def start(self) -> None:
        self.calls.append("start")

    def write(self, data: bytes) -> bool:
        self.calls.append("write")
        self.entered_write.set()
        if self._gate is not None:
            self._gate.wait(5.0)
        if self._fail:
            raise RuntimeError("device unplugged")
        self.writes.append(bytes(data))
        return False

    def stop(self) -> None:
        self.calls.append("stop")

    def close(self) -> None:
        self.calls.append("close")

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)
