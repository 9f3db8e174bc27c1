# =============================================================================
# file_sound.py — Streaming, windowed file-backed Signal
# =============================================================================
#
# A FileSound answers amplitudes(t) for an audio file of any length while
# holding at most one decode window (WINDOW_SECONDS of int16 frames) plus one
# small discard buffer in memory.
#
# The decode stream is treated as FORWARD-ONLY.  Decoders for compressed
# formats build up state while reading, so skipping means reading and
# throwing frames away, and going backwards means closing and reopening the
# file.  Cost is therefore asymmetric:
#
#   query lands in the window       → O(1)
#   query is ahead of the window    → O(gap) reads, then one window fill
#   query is behind the window      → reopen + O(position) reads
#
# Render passes (SOM/) always sample at increasing times, so in practice the
# window slides forward and a rewind happens once per pass.
#
# STATE MACHINE (f = floor(t * sample_rate)):
#
#   UNPOSITIONED ──query──▶ POSITIONED ──query past window──▶ POSITIONED
#        ▲                      │                                │
#        │ rewind               │ short discard / empty read     │
#        │ (f behind window     ▼                                │
#        │  or cursor)       EXHAUSTED ◀─────────────────────────┘
#        └──────────────────────┘
#
# Mid-stream decode errors are NOT raised: they put the sound in EXHAUSTED and
# it answers silence until the next rewind.
# =============================================================================

from __future__ import annotations

import enum
import logging
import os
import threading

import numpy as np
import soundfile as sf

from CTSE.errors import DecodeFailure, StreamExhausted
from CTSE.SFM.constants import DISCARD_FRAME_MAX, SHORT_SCALE, WINDOW_SECONDS
from CTSE.SGM.signal import Signal

logger = logging.getLogger(__name__)


class DecoderState(enum.Enum):
    UNPOSITIONED = "unpositioned"   # no window; cursor at a known frame
    POSITIONED   = "positioned"     # window valid
    EXHAUSTED    = "exhausted"      # last fill came up short; silence until rewind


class FileSound(Signal):
    """
    Signal backed by an audio file, decoded lazily through a sliding window.

    Always close it when done, preferably with a `with` block:

        with read_sound("take1.flac") as s:
            save(trim(s, 10.0, 20.0), "clip.wav")

    Parameters
    ----------
    path : str | os.PathLike
        Any container/codec libsndfile can read.
    window_seconds : float
        Decode window length, in seconds of the file's own sample rate.
    discard_frames : int
        Largest read used when skipping forward.

    All mutable state (stream, cursor, window) is guarded by one re-entrant
    lock per instance, so sampling the same FileSound from several threads is
    safe; it is just slow if the threads pull the window in different
    directions.
    """

    def __init__(
        self,
        path,
        window_seconds: float = WINDOW_SECONDS,
        discard_frames: int = DISCARD_FRAME_MAX,
    ) -> None:
        self.path   = os.fspath(path)
        self._lock  = threading.RLock()
        self._stream: sf.SoundFile | None = self._open()

        info = self._stream
        self.sample_rate = info.samplerate
        self.format      = info.format
        self.subtype     = info.subtype
        self._channels   = info.channels

        # Fixed-capacity buffers, allocated once.  The window holds decoded
        # frames; the discard buffer is scratch space for skipping ahead.
        capacity       = max(1, int(window_seconds * self.sample_rate))
        self._window   = np.zeros((capacity, self._channels), dtype=np.int16)
        self._discard  = np.empty((max(1, int(discard_frames)), self._channels), dtype=np.int16)

        self._cursor: int = 0                   # frames consumed from the stream
        self._window_start: int | None = None
        self._window_end:   int | None = None   # inclusive
        self._state = DecoderState.UNPOSITIONED

        # Prefer the container's own frame count; count by decoding otherwise.
        self._frames = info.frames if info.frames and info.frames > 0 else self._count_frames()
        self._duration = self._frames / float(self.sample_rate)

        logger.info(
            "Opened %s: %d Hz, %d ch, %d frames (%.3f s), %s/%s",
            self.path, self.sample_rate, self._channels, self._frames,
            self._duration, self.format, self.subtype,
        )

    # ── Signal contract ──────────────────────────────────────────────────────

    @property
    def duration(self) -> float:
        return self._duration

    def num_channels(self) -> int:
        return self._channels

    def amplitudes(self, t: float):
        with self._lock:
            self._check_open()
            frame_at_t = int(t * self.sample_rate)

            # Nothing to decode before the start or past the last frame.
            if frame_at_t < 0 or frame_at_t >= self._frames:
                return self.zero_frame()

            if frame_at_t < self._reachable_from():
                self.rewind()

            if self._window_end is None or frame_at_t > self._window_end:
                self._fill_window_at(frame_at_t)

            if self._window_end is None:
                return self.zero_frame()

            row = self._window[frame_at_t - self._window_start]
            return tuple((row / SHORT_SCALE).tolist())

    # ── State inspection ─────────────────────────────────────────────────────

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def window(self) -> tuple[int, int] | None:
        """(first, last) frame currently buffered, or None."""
        if self._window_end is None:
            return None
        return self._window_start, self._window_end

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def closed(self) -> bool:
        return self._stream is None

    # ── Stream control ───────────────────────────────────────────────────────

    def rewind(self) -> None:
        """Reopen the decode stream at frame 0 and drop the window."""
        with self._lock:
            self._check_open()
            logger.debug("Rewinding %s from frame %d", self.path, self._cursor)
            old, self._stream = self._stream, None
            old.close()
            self._stream = self._open()
            self._cursor = 0
            self._invalidate_window()
            self._state = DecoderState.UNPOSITIONED

    def close(self) -> None:
        """Release the decode stream.  Safe to call more than once."""
        with self._lock:
            if self._stream is None:
                return
            stream, self._stream = self._stream, None
            self._invalidate_window()
            self._state = DecoderState.UNPOSITIONED
            logger.debug("Closing %s", self.path)
            stream.close()

    # ── Internal helpers ─────────────────────────────────────────────────────

    def _open(self) -> sf.SoundFile:
        try:
            return sf.SoundFile(self.path)
        except (RuntimeError, OSError) as exc:   # sf.LibsndfileError is a RuntimeError
            raise DecodeFailure(f"Can't open {self.path!r} for decoding: {exc}") from exc

    def _check_open(self) -> None:
        if self._stream is None:
            raise ValueError(f"I/O operation on closed sound {self.path!r}")

    def _reachable_from(self) -> int:
        """First frame that can be served without reopening the stream."""
        if self._window_start is not None:
            return self._window_start
        return self._cursor

    def _invalidate_window(self) -> None:
        self._window_start = None
        self._window_end   = None

    def _read_into(self, out: np.ndarray) -> int:
        """Decode up to len(out) frames into `out`; return how many arrived."""
        try:
            got = len(self._stream.read(out=out))
        except (RuntimeError, OSError) as exc:
            raise StreamExhausted(f"decode error at frame {self._cursor}: {exc}") from exc
        self._cursor += got
        return got

    def _advance(self, n: int) -> int:
        """Read and drop `n` frames in discard-buffer sized steps.  Returns the
        number of frames actually dropped."""
        dropped = 0
        step    = len(self._discard)
        while dropped < n:
            got = self._read_into(self._discard[:min(step, n - dropped)])
            if got == 0:
                break
            dropped += got
        return dropped

    def _fill_window_at(self, frame: int) -> None:
        try:
            gap = frame - self._cursor
            if self._advance(gap) < gap:
                raise StreamExhausted(
                    f"stream ended at frame {self._cursor} while seeking to {frame}"
                )
            got = self._read_into(self._window)
            if got == 0:
                raise StreamExhausted(f"no frames left at frame {frame}")
        except StreamExhausted as exc:
            logger.warning("%s: %s; answering silence until rewind", self.path, exc)
            self._invalidate_window()
            self._state = DecoderState.EXHAUSTED
            return

        self._window_start = frame
        self._window_end   = frame + got - 1
        self._state        = DecoderState.POSITIONED

    def _count_frames(self) -> int:
        """Decode the whole stream once to count frames, then rewind."""
        total = 0
        try:
            while True:
                got = self._read_into(self._discard)
                if got == 0:
                    break
                total += got
        except StreamExhausted as exc:
            self.close()
            raise DecodeFailure(f"Can't count frames in {self.path!r}: {exc}") from exc
        self.rewind()
        return total


def read_sound(path, **kwargs) -> FileSound:
    """
    Open the audio file at `path` as a streaming Signal.

    Raises:
        DecodeFailure: the file is missing, unreadable, or in a format
                       libsndfile does not support.
    """
    return FileSound(path, **kwargs)
