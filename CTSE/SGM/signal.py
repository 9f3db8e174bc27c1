# =============================================================================
# signal.py — The Signal contract
# =============================================================================
#
# A Signal has a duration (seconds), a fixed channel count, and answers
# amplitudes(t) with one float per channel.  Amplitudes are NOT clamped here;
# clamping happens only when encoding to PCM (SOM/pcm.py).
#
# Channel count comes from one of two places, decided once per instance:
#   - the subclass reports it directly by overriding num_channels()
#     (FunctionSignal, FileSound), or
#   - the base class probes amplitudes(0.0) the first time it is asked and
#     caches the width.
#
# Outside a Signal's own implementation, always query it through sample().
# =============================================================================

from __future__ import annotations

import abc
import math
from typing import Callable, Optional, Sequence, Tuple

from CTSE.errors import InvalidSignal

Frame = Tuple[float, ...]   # one entry per channel


class Signal(abc.ABC):
    """
    Abstract continuous-time, duration-bounded, multi-channel sound.

    Subclasses implement `duration` and `amplitudes(t)`.  Resource-backed
    signals also override `close()`; every signal can be used in a `with`
    block.
    """

    _channels: int | None = None

    @property
    @abc.abstractmethod
    def duration(self) -> float:
        """Length of the signal in seconds."""

    @abc.abstractmethod
    def amplitudes(self, t: float) -> Sequence[float]:
        """Raw, unchecked frame at time `t`.  Use sample() instead."""

    def num_channels(self) -> int:
        if self._channels is None:
            self._channels = len(self.amplitudes(0.0))
        return self._channels

    @property
    def channels(self) -> int:
        return self.num_channels()

    def zero_frame(self) -> Frame:
        return (0.0,) * self.num_channels()

    def close(self) -> None:
        """Release any resources held by the signal.  No-op by default."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"<{type(self).__name__} duration={self.duration:.6g}s "
                f"channels={self.num_channels()}>")


class FunctionSignal(Signal):
    """
    Signal whose amplitudes are produced by a plain function of time.

    The channel count is fixed at construction: either given as `channels`,
    or found by calling `fn(0.0)` once.  Combinators always pass it, so
    building one never samples its inputs.
    """

    def __init__(
        self,
        duration: float,
        fn: Callable[[float], Sequence[float]],
        channels: Optional[int] = None,
    ) -> None:
        duration = float(duration)
        if not math.isfinite(duration) or duration < 0.0:
            raise InvalidSignal(f"duration must be a finite value >= 0, got {duration!r}")

        if channels is None:
            probe = fn(0.0)
            if probe is None or len(probe) == 0:
                raise InvalidSignal(
                    f"generator {fn!r} returned an empty frame at t=0.0; "
                    f"a signal needs at least one channel"
                )
            channels = len(probe)
        elif channels < 1:
            raise InvalidSignal(f"a signal needs at least one channel, got {channels}")

        self._duration = duration
        self._fn       = fn
        self._channels = int(channels)

    @property
    def duration(self) -> float:
        return self._duration

    def amplitudes(self, t: float) -> Sequence[float]:
        return self._fn(t)

    def num_channels(self) -> int:
        return self._channels


def make_signal(
    duration: float,
    fn: Callable[[float], Sequence[float]],
    channels: Optional[int] = None,
) -> Signal:
    """
    Create a signal `duration` seconds long whose amplitudes are produced by
    `fn(t)`.  Pass `channels` when the width is already known; otherwise
    `fn(0.0)` is called once to find it.

    Raises:
        InvalidSignal: `fn(0.0)` yields an empty frame, `channels` < 1, or
                       `duration` is negative / not finite.
    """
    return FunctionSignal(duration, fn, channels)


def channel_count(s: Signal) -> int:
    """Return the number of channels in `s`."""
    return s.num_channels()


def duration(s: Signal) -> float:
    """Return the duration of `s` in seconds."""
    return s.duration


def sample(s: Signal, t: float) -> Frame:
    """
    Return the frame of `s` at time `t`, or an all-zero frame when `t` falls
    outside [0, duration].  Call this in preference to `s.amplitudes(t)`.
    """
    if 0.0 <= t <= s.duration:
        return tuple(s.amplitudes(t))
    return s.zero_frame()
