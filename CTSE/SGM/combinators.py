# =============================================================================
# combinators.py — Pure signal transforms
# =============================================================================
#
# Every function here takes one or more signals and returns a new one.  None
# of them mutate their inputs, and none of them do I/O; a file-backed input is
# only read when the combined signal is sampled.
#
# DURATION / CHANNEL RULES:
#
#   combinator          duration             channels
#   ------------------  -------------------  ---------------------------
#   multiplex(s, n)     dur(s)               n          (s must be mono)
#   to_stereo(s)        dur(s)               2          (s mono or stereo)
#   mix(a, b)           max(dur a, dur b)    equal
#   multiply(a, b)      min(dur a, dur b)    equal
#   gain(s, x)          dur(s)               same
#   pan(s, x)           dur(s)               2          (s must be stereo)
#   trim(s, a, b)       b - a                same
#   append(a, b)        dur a + dur b        equal
#   timeshift(s, x)     x + dur(s)           same
#   fade_in / fade_out  dur(s)               same
#
# Mismatches raise at construction time, never lazily at query time.
# =============================================================================

from __future__ import annotations

from CTSE.errors import ChannelMismatch, UnsupportedChannelCount
from CTSE.SGM.generators import linear, silence
from CTSE.SGM.signal import Signal, channel_count, make_signal, sample


def _require_same_channels(op: str, s1: Signal, s2: Signal) -> int:
    c1 = channel_count(s1)
    c2 = channel_count(s2)
    if c1 != c2:
        raise ChannelMismatch(
            f"{op}() needs signals with the same number of channels, "
            f"got {c1} and {c2}"
        )
    return c1


# ── Channel layout ──────────────────────────────────────────────────────────

def multiplex(s: Signal, n: int) -> Signal:
    """Turn a mono signal into an `n`-channel signal carrying the same data
    on every channel."""
    if channel_count(s) != 1:
        raise ChannelMismatch(
            f"multiplex() needs a mono signal, got {channel_count(s)} channels"
        )
    if n == 1:
        return s
    return make_signal(s.duration, lambda t: sample(s, t) * n, n)


def to_stereo(s: Signal) -> Signal:
    """Coerce a mono or stereo signal to stereo."""
    n = channel_count(s)
    if n == 1:
        return multiplex(s, 2)
    if n == 2:
        return s
    raise UnsupportedChannelCount(
        f"Can't make a stereo signal out of one with {n} channels "
        f"(only 1 or 2 are supported)"
    )


# ── Arithmetic ──────────────────────────────────────────────────────────────

def mix(s1: Signal, s2: Signal) -> Signal:
    """Sum two signals.  The result lasts as long as the longer input."""
    n = _require_same_channels("mix", s1, s2)
    return make_signal(
        max(s1.duration, s2.duration),
        lambda t: tuple(a + b for a, b in zip(sample(s1, t), sample(s2, t))),
        n,
    )


def multiply(s1: Signal, s2: Signal) -> Signal:
    """Multiply two signals sample by sample.  The result lasts as long as
    the shorter input."""
    n = _require_same_channels("multiply", s1, s2)
    return make_signal(
        min(s1.duration, s2.duration),
        lambda t: tuple(a * b for a, b in zip(sample(s1, t), sample(s2, t))),
        n,
    )


def gain(s: Signal, amount: float) -> Signal:
    """Scale every channel of `s` by `amount`."""
    amount = float(amount)
    return make_signal(s.duration, lambda t: tuple(a * amount for a in sample(s, t)),
                       channel_count(s))


def pan(s: Signal, amount: float) -> Signal:
    """
    Cross-fade the two channels of a stereo signal by `amount` in [0.0, 1.0].

    0.0 leaves both channels unchanged, 0.5 puts the average of both on each
    side (mono centre), and 1.0 swaps left and right.
    """
    if channel_count(s) != 2:
        raise ChannelMismatch(
            f"pan() needs a stereo signal, got {channel_count(s)} channels"
        )
    amount     = float(amount)
    complement = 1.0 - amount

    def panned(t: float):
        a, b = sample(s, t)
        return (a * complement + b * amount,
                a * amount + b * complement)

    return make_signal(s.duration, panned, 2)


# ── Time ────────────────────────────────────────────────────────────────────

def trim(s: Signal, start: float, end: float) -> Signal:
    """Keep only the region of `s` between `start` and `end` seconds."""
    start = float(start)
    return make_signal(float(end) - start, lambda t: sample(s, t + start), channel_count(s))


def append(s1: Signal, s2: Signal) -> Signal:
    """Play `s1`, then `s2`."""
    n  = _require_same_channels("append", s1, s2)
    d1 = s1.duration

    def joined(t: float):
        if t <= d1:
            return sample(s1, t)
        return sample(s2, t - d1)

    return make_signal(d1 + s2.duration, joined, n)


def timeshift(s: Signal, amount: float) -> Signal:
    """Insert `amount` seconds of silence at the beginning of `s`."""
    return append(silence(amount, channel_count(s)), s)


# ── Envelopes ───────────────────────────────────────────────────────────────

def fade_in(s: Signal, fade_duration: float) -> Signal:
    """Ramp `s` linearly from silence at t=0 to full level at `fade_duration`."""
    n    = channel_count(s)
    fade = min(float(fade_duration), s.duration)
    envelope = append(linear(fade, 0.0, 1.0, n),
                      linear(s.duration - fade, 1.0, 1.0, n))
    return multiply(s, envelope)


def fade_out(s: Signal, fade_duration: float) -> Signal:
    """Ramp `s` linearly down to silence over its last `fade_duration` seconds."""
    n    = channel_count(s)
    fade = min(float(fade_duration), s.duration)
    envelope = append(linear(s.duration - fade, 1.0, 1.0, n),
                      linear(fade, 1.0, 0.0, n))
    return multiply(s, envelope)
