# =============================================================================
# generators.py — Source signals
# =============================================================================
#
# Signals that are not built from other signals: silence, constants, linear
# ramps, piecewise-linear envelopes, and two test tones.
#
# segmented_linear() is the one exception: it is a fold of append() over
# linear() segments, so it imports the combinators lazily.
# =============================================================================

from __future__ import annotations

import math

from CTSE.errors import InvalidSpec
from CTSE.SGM.signal import Signal, make_signal


def silence(duration: float, n: int = 1) -> Signal:
    """`n`-channel signal (default mono) that is `duration` long but silent."""
    frame = (0.0,) * n
    return make_signal(duration, lambda t: frame, n)


def null_sound() -> Signal:
    """Zero-duration mono signal."""
    return silence(0.0, 1)


def constant(duration: float, value: float, n: int = 1) -> Signal:
    """`n`-channel signal holding `value` for `duration` seconds."""
    frame = (float(value),) * n
    return make_signal(duration, lambda t: frame, n)


def linear(duration: float, start: float, end: float, n: int = 1) -> Signal:
    """
    `n`-channel signal (default mono) whose amplitude moves linearly from
    `start` at t=0 to `end` at t=duration.

    A zero-length ramp holds `start`.
    """
    duration = float(duration)
    start    = float(start)
    span     = float(end) - start

    if duration == 0.0:
        return constant(0.0, start, n)

    def ramp(t: float):
        return (start + span * (t / duration),) * n

    return make_signal(duration, ramp, n)


def sinusoid(duration: float, frequency: float) -> Signal:
    """Mono sine tone of `frequency` Hz."""
    w = 2.0 * math.pi * float(frequency)
    return make_signal(duration, lambda t: (math.sin(w * t),), 1)


def square_wave(duration: float, frequency: float) -> Signal:
    """Mono signal toggling between 1.0 and -1.0 at `frequency` Hz."""
    half_periods_per_s = 2.0 * float(frequency)

    def square(t: float):
        return (1.0,) if int(t * half_periods_per_s) % 2 == 0 else (-1.0,)

    return make_signal(duration, square, 1)


def segmented_linear(*spec: float) -> Signal:
    """
    Mono signal whose amplitude changes linearly as described by `spec`, a
    sequence of interleaved amplitudes and durations.  The spec

        1.0 30
        0.0 10
        0.0 0.5
        1.0

    starts at 1.0, ramps to 0.0 at t=30, holds 0.0 for 10 s, then ramps up to
    1.0 over the last 0.5 s (40.5 s total).

    Raises:
        InvalidSpec: the spec does not have an odd number of entries, or has
                     fewer than five.
    """
    from CTSE.SGM.combinators import append

    if len(spec) % 2 == 0 or len(spec) < 5:
        raise InvalidSpec(
            f"segmented_linear needs an odd number (>= 5) of interleaved "
            f"amplitudes and durations, got {len(spec)}: {spec!r}"
        )

    segments = [
        linear(spec[i + 1], spec[i], spec[i + 2])
        for i in range(0, len(spec) - 2, 2)
    ]
    result = segments[0]
    for seg in segments[1:]:
        result = append(result, seg)
    return result
