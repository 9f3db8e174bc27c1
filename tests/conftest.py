"""
Shared fixtures for the test suite.

WAV fixtures are written with soundfile into pytest's tmp_path at a low
sample rate (1 kHz) so that window and discard sizes stay small enough to
reason about frame by frame.
"""

from __future__ import annotations

import numpy as np
import pytest
import soundfile as sf

from tests.helpers import RAMP_FRAMES, TEST_RATE, FakeDevice

# ---------------------------------------------------------------------------
# WAV file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def write_wav(tmp_path):
    """Factory: write int16 `data` (frames, channels) to a WAV file."""

    def _write(name: str, data: np.ndarray, rate: int = TEST_RATE):
        path = tmp_path / name
        sf.write(str(path), np.asarray(data, dtype=np.int16), rate, subtype="PCM_16")
        return path

    return _write


@pytest.fixture
def ramp_wav(write_wav):
    """Mono file whose frame k holds the int16 value k."""
    data = np.arange(RAMP_FRAMES, dtype=np.int16).reshape(-1, 1)
    return write_wav("ramp.wav", data)


@pytest.fixture
def stereo_wav(write_wav):
    """Stereo file: left = +k, right = -k."""
    k    = np.arange(RAMP_FRAMES, dtype=np.int16)
    data = np.stack([k, -k], axis=1)
    return write_wav("stereo.wav", data)


@pytest.fixture
def half_scale_wav(write_wav):
    """1 s stereo file holding the constant 16384 (0.5 after decoding)."""
    data = np.full((TEST_RATE, 2), 16384, dtype=np.int16)
    return write_wav("half.wav", data)


# ---------------------------------------------------------------------------
# Fake output device
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_devices():
    """Factory for play(device_factory=...); `.made` lists every device."""
    made: list[FakeDevice] = []

    def factory(**kwargs):
        def _open(sample_rate: int, channels: int) -> FakeDevice:
            device = FakeDevice(sample_rate, channels, **kwargs)
            made.append(device)
            return device
        return _open

    factory.made = made
    return factory
