# =============================================================================
# wav_export.py — Stream a Signal into a 16-bit PCM WAV file
# =============================================================================
#
# The signal is never rendered in full: a SampledInputStream produces PCM in
# STREAM_CHUNK_FRAMES sized chunks and each chunk goes straight into the
# libsndfile writer, which owns the RIFF header and data-chunk bookkeeping.
# =============================================================================

from __future__ import annotations

import logging
import os
from pathlib import Path

import soundfile as sf

from CTSE.SFM.constants import OVERSAMPLE_STEPS, SAMPLE_RATE
from CTSE.SGM.signal import Signal
from CTSE.SOM.byte_stream import SampledInputStream

logger = logging.getLogger(__name__)


def save(
    s: Signal,
    path,
    sample_rate: int = SAMPLE_RATE,
    steps: int = OVERSAMPLE_STEPS,
) -> int:
    """
    Save `s` as a 16-bit PCM WAV file at `sample_rate`.

    Args:
        s:           signal to render.
        path:        file path (parent directories are created) or a
                     writable binary file object.
        sample_rate: output rate in Hz.
        steps:       oversampling factor per output frame.

    Returns:
        Number of frames written: int(duration * sample_rate).
    """
    if isinstance(path, (str, os.PathLike)):
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        target = os.fspath(path)
    else:
        target = path

    stream = SampledInputStream(s, sample_rate, steps)
    logger.info(
        "Saving %s: %d frames, %d ch @ %d Hz",
        target, stream.total_frames, stream.channels, stream.sample_rate,
    )

    with stream, sf.SoundFile(
        target, "w",
        samplerate=stream.sample_rate,
        channels=stream.channels,
        subtype="PCM_16",
        format="WAV",
    ) as out:
        for chunk in stream.chunks():
            out.buffer_write(chunk, dtype="int16")

    return stream.total_frames
