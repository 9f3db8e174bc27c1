# =============================================================================
# byte_stream.py — Pull-based PCM byte stream over a Signal
# =============================================================================
#
# A SampledInputStream is a read-only binary file object whose contents are
# the signal rendered as 16-bit PCM.  Nothing is rendered until it is read:
# each read() renders just the frames covering the requested byte range.
#
#   total bytes = int(duration * sample_rate) * channels * 2
#
# Besides the io.RawIOBase API it offers the classic pull-stream extras:
#   available()  bytes left
#   mark()       remember the current logical position
#   reset()      go back to the marked position (re-renders on next read)
#   skip(n)      move forward without rendering
#   chunks(size) generator of successive reads
#
# mark/reset move only the logical byte cursor.  A file-backed signal
# underneath will rewind itself on its own when it is sampled behind its
# decode window.
# =============================================================================

from __future__ import annotations

import io
from typing import Iterator

from CTSE.SFM.constants import (
    BYTES_PER_SAMPLE, OVERSAMPLE_STEPS, SAMPLE_RATE, STREAM_CHUNK_FRAMES,
)
from CTSE.SGM.signal import Signal, channel_count
from CTSE.SOM.pcm import frames_to_pcm, render_frames, total_frames


class SampledInputStream(io.RawIOBase):
    """
    Lazy 16-bit little-endian PCM stream over `s` at `sample_rate`.

    Usage:
        stream = SampledInputStream(s, 44_100)
        header_bytes = stream.read(4)        # renders 1 frame (stereo)
        for chunk in stream.chunks():        # rest of the signal
            sink.write(chunk)
    """

    def __init__(
        self,
        s: Signal,
        sample_rate: int = SAMPLE_RATE,
        steps: int = OVERSAMPLE_STEPS,
    ) -> None:
        super().__init__()
        self.signal          = s
        self.sample_rate     = int(sample_rate)
        self.steps           = steps
        self.channels        = channel_count(s)
        self.bytes_per_frame = self.channels * BYTES_PER_SAMPLE
        self.total_frames    = total_frames(s, self.sample_rate)
        self.total_bytes     = self.total_frames * self.bytes_per_frame

        self._position: int = 0
        self._marked: int | None = None

    # ── io.RawIOBase ─────────────────────────────────────────────────────────

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        """Render up to len(b) bytes into `b`.  Returns 0 at end of stream."""
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        view = memoryview(b).cast("B")
        n = min(len(view), self.available())
        if n <= 0:
            return 0
        view[:n] = self._render(self._position, n)
        self._position += n
        return n

    def tell(self) -> int:
        return self._position

    # ── Pull-stream extras ───────────────────────────────────────────────────

    def available(self) -> int:
        return max(0, self.total_bytes - self._position)

    def mark(self, read_limit: int | None = None) -> None:
        """Remember the current position.  `read_limit` is accepted for API
        compatibility and ignored: any amount can be re-read."""
        self._marked = self._position

    def reset(self) -> None:
        """Return to the position saved by the last mark()."""
        if self._marked is None:
            raise OSError("reset() called without a preceding mark()")
        self._position = self._marked

    def skip(self, n: int) -> int:
        """Advance up to `n` bytes without rendering.  Returns bytes skipped."""
        step = max(0, min(int(n), self.available()))
        self._position += step
        return step

    def chunks(self, size: int | None = None) -> Iterator[bytes]:
        """Yield successive reads of `size` bytes (default: a whole number of
        frames) until the stream is exhausted."""
        if size is None:
            size = STREAM_CHUNK_FRAMES * self.bytes_per_frame
        while True:
            data = self.read(size)
            if not data:
                return
            yield data

    # ── Internal helpers ─────────────────────────────────────────────────────

    def _render(self, start: int, length: int) -> bytes:
        """Render bytes [start, start + length), which need not be frame
        aligned."""
        bpf   = self.bytes_per_frame
        first = start // bpf
        last  = -(-(start + length) // bpf)          # ceil division
        frames = render_frames(self.signal, first, last - first,
                               self.sample_rate, self.steps)
        data   = frames_to_pcm(frames, self.channels)
        offset = start - first * bpf
        return data[offset:offset + length]
