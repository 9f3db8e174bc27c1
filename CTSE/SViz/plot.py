# =============================================================================
# plot.py — Sampled traces and a quick amplitude/time plot
# =============================================================================
#
# A trace is PLOT_POINTS samples of one channel spread evenly over
# [0, duration).  Sampling goes through sample(), in increasing time order,
# so plotting a file-backed signal slides its decode window forward once.
# =============================================================================

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from CTSE.SFM.constants import PLOT_POINTS
from CTSE.SGM.signal import Signal, channel_count, sample

logger = logging.getLogger(__name__)


def function_points(
    fn: Callable[[float], float],
    start: float,
    end: float,
    step: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Evaluate `fn` at start, start + step, ... up to (not including) `end`.

    Returns:
        (xs, ys) as float64 arrays of equal length.
    """
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step}")
    xs = np.arange(start, end, step, dtype=np.float64)
    ys = np.fromiter((fn(x) for x in xs), dtype=np.float64, count=len(xs))
    return xs, ys


def channel_trace(
    s: Signal,
    channel: int = 0,
    points: int = PLOT_POINTS,
) -> tuple[np.ndarray, np.ndarray]:
    """(t, amplitude) arrays for one channel of `s`, `points` samples long."""
    n = channel_count(s)
    if not 0 <= channel < n:
        raise ValueError(f"channel {channel} out of range for a {n}-channel signal")
    if points < 1:
        raise ValueError(f"points must be >= 1, got {points}")
    if s.duration == 0.0:
        return np.zeros(0), np.zeros(0)

    step = s.duration / points
    ts   = np.arange(points, dtype=np.float64) * step
    amps = np.fromiter((sample(s, t)[channel] for t in ts), dtype=np.float64, count=points)
    return ts, amps


def visualize(
    s: Signal,
    channel: int = 0,
    points: int = PLOT_POINTS,
    show: bool = True,
):
    """
    Plot one channel of `s` against time and return the matplotlib Figure.

    With show=False the figure is only built (for saving or headless tests).
    """
    import matplotlib.pyplot as plt

    ts, amps = channel_trace(s, channel, points)
    logger.debug("Plotting channel %d of %r (%d points)", channel, s, len(ts))

    fig, ax = plt.subplots(figsize=(10, 3))
    ax.plot(ts, amps, linewidth=0.8)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Amplitude")
    ax.set_title(f"Channel {channel}")
    ax.set_xlim(0.0, max(s.duration, 1e-9))
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if show:
        plt.show()
    return fig
