# =============================================================================
# oversample.py — Averaging oversampler
# =============================================================================
#
# A continuous signal sampled once per output frame picks up whatever happens
# to be at that exact instant, which shows up as jitter / aliasing on busy
# material.  Averaging a few samples spread across the frame period smooths
# that out.  No filter design beyond the mean; the caller picks n and delta_t.
# =============================================================================

from __future__ import annotations

import numpy as np

from CTSE.errors import ChannelMismatch
from CTSE.SGM.signal import Signal, channel_count, sample


def oversample(s: Signal, t: float, n: int, delta_t: float) -> tuple:
    """
    Return the per-channel mean of `n` samples of `s` taken at
    t, t + delta_t, t + 2*delta_t, ...

    Samples are taken in increasing time order.  With n == 1 this is exactly
    sample(s, t).

    Raises:
        ValueError:      n < 1.
        ChannelMismatch: `s` returned a frame whose width differs from its
                         channel count (a malformed signal).
    """
    if n < 1:
        raise ValueError(f"oversample needs n >= 1, got {n}")

    width = channel_count(s)
    acc   = np.zeros(width, dtype=np.float64)

    for i in range(n):
        frame = sample(s, t + delta_t * i)
        if len(frame) != width:
            raise ChannelMismatch(
                f"{s!r} returned a {len(frame)}-channel frame at "
                f"t={t + delta_t * i:.6f}, expected {width}"
            )
        acc += frame

    return tuple((acc / n).tolist())
