# =============================================================================
# pcm.py — Float frames → signed 16-bit little-endian PCM
# =============================================================================
#
# Shared by playback.py and byte_stream.py so both paths quantize exactly the
# same way:
#
#   1. Output frame k sits at t_k = k / sample_rate.
#   2. Its value is oversample(s, t_k, steps, 1 / (sample_rate * steps)).
#   3. Each channel is clamped to [-1.0, 1.0], scaled by 32767 and truncated
#      toward zero → int16 in [-32767, 32767].
#   4. Channels are interleaved per frame, little-endian.
# =============================================================================

from __future__ import annotations

from typing import Sequence

import numpy as np

from CTSE.SFM.constants import BYTES_PER_SAMPLE, OVERSAMPLE_STEPS, PCM_MAX
from CTSE.SGM.signal import Signal, channel_count
from CTSE.SOM.oversample import oversample


def short_sample(x: float) -> int:
    """Scale a float amplitude to a 16-bit integer, clamping overflows."""
    x = min(1.0, max(-1.0, float(x)))
    return int(PCM_MAX * x)


def bytes_per_frame(s: Signal) -> int:
    return channel_count(s) * BYTES_PER_SAMPLE


def total_frames(s: Signal, sample_rate: int) -> int:
    """Number of whole output frames `s` spans at `sample_rate`."""
    return int(s.duration * sample_rate)


def render_frames(
    s: Signal,
    first: int,
    count: int,
    sample_rate: int,
    steps: int = OVERSAMPLE_STEPS,
) -> list[tuple]:
    """
    Oversample `count` consecutive output frames of `s`, starting at frame
    index `first`.  Sampling times are strictly increasing.
    """
    delta_t = 1.0 / (sample_rate * steps)
    return [
        oversample(s, k / sample_rate, steps, delta_t)
        for k in range(first, first + count)
    ]


def frames_to_pcm(frames: Sequence[Sequence[float]], channels: int) -> bytes:
    """
    Pack float frames into interleaved signed 16-bit little-endian bytes.

    Args:
        frames:   sequence of frames, each `channels` floats wide.
        channels: frame width (needed when `frames` is empty).

    Returns:
        bytes, len(frames) * channels * 2 long.
    """
    data = np.clip(np.asarray(frames, dtype=np.float64).reshape(-1, channels), -1.0, 1.0)
    return (data * PCM_MAX).astype("<i2").tobytes()
