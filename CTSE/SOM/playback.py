# =============================================================================
# playback.py — Asynchronous playback with a stop handle
# =============================================================================
#
# play(s) opens an int16 output stream on the sound card, then hands off to a
# background thread that repeatedly:
#
#   1. renders PLAYBACK_BLOCK_SECONDS of oversampled frames,
#   2. writes them to the device (blocking until the device accepts them),
#   3. checks the stop flag.
#
# Stopping raises the flag and stops the device straight away, so a write
# already in flight is cut short instead of draining.  The worker looks at
# the flag between writes and never starts another block once it is set.
#
# The device is anything with start() / write(bytes) / stop() / close().  By
# default that is a sounddevice.RawOutputStream; tests pass a fake through
# `device_factory`.
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Callable

from CTSE.SFM.constants import OVERSAMPLE_STEPS, PLAYBACK_BLOCK_SECONDS, SAMPLE_RATE
from CTSE.SGM.signal import Signal, channel_count
from CTSE.SOM.pcm import frames_to_pcm, render_frames, total_frames

logger = logging.getLogger(__name__)


def open_device(sample_rate: int, channels: int):
    """Open a 16-bit output stream on the default sound card."""
    # PortAudio is only needed once something is actually played.
    import sounddevice as sd

    return sd.RawOutputStream(samplerate=sample_rate, channels=channels, dtype="int16")


class Playback:
    """
    Handle for one background playback.  Calling it stops playback.

        stop = play(s)
        ...
        stop()            # or stop.stop(); stop.wait() to block until done

    Stopping sets the flag and stops the device at once, which also cuts
    short a write that is still blocked; the worker then exits before its
    next block.  Stopping more than once is harmless.
    """

    def __init__(
        self,
        s: Signal,
        device,
        sample_rate: int,
        steps: int,
        block_seconds: float,
    ) -> None:
        self.signal       = s
        self.sample_rate  = sample_rate
        self.steps        = steps
        self.channels     = channel_count(s)
        self.total_frames = total_frames(s, sample_rate)
        self.block_frames = max(1, int(block_seconds * sample_rate))
        self.frames_written = 0
        self.error: BaseException | None = None

        self._device         = device
        self._device_lock    = threading.Lock()
        self._device_stopped = False
        self._stopped = threading.Event()
        self._done    = threading.Event()
        self._thread  = threading.Thread(target=self._run, name="ctse-playback", daemon=True)

    def __call__(self) -> None:
        self.stop()

    def start(self) -> "Playback":
        self._thread.start()
        return self

    def stop(self) -> None:
        """Stop playback: raise the flag, then stop the device."""
        self._stopped.set()
        self._stop_device()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until playback ends.  Returns False on timeout."""
        return self._done.wait(timeout)

    @property
    def is_playing(self) -> bool:
        return not self._done.is_set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def _stop_device(self) -> None:
        with self._device_lock:
            if self._device_stopped:
                return
            self._device_stopped = True
            self._device.stop()

    def _run(self) -> None:
        logger.info(
            "Playback started: %d frames, %d ch @ %d Hz",
            self.total_frames, self.channels, self.sample_rate,
        )
        try:
            with self._device_lock:
                # stop() may already have run before this thread got going
                if not self._device_stopped:
                    self._device.start()
            while not self._stopped.is_set() and self.frames_written < self.total_frames:
                count  = min(self.block_frames, self.total_frames - self.frames_written)
                frames = render_frames(self.signal, self.frames_written, count,
                                       self.sample_rate, self.steps)
                self._device.write(frames_to_pcm(frames, self.channels))
                self.frames_written += count
        except Exception as exc:
            if self._stopped.is_set():
                # a write interrupted by stop() may fail; that is the stop
                logger.debug("Write ended by stop: %s", exc)
            else:
                self.error = exc
                logger.exception("Playback failed after %d frames", self.frames_written)
        finally:
            try:
                self._stop_device()
                self._device.close()
            finally:
                self._done.set()
                logger.info(
                    "Playback %s after %d/%d frames",
                    "stopped" if self._stopped.is_set() else "finished",
                    self.frames_written, self.total_frames,
                )


def play(
    s: Signal,
    sample_rate: int = SAMPLE_RATE,
    steps: int = OVERSAMPLE_STEPS,
    block_seconds: float = PLAYBACK_BLOCK_SECONDS,
    device_factory: Callable[[int, int], object] = open_device,
) -> Playback:
    """
    Play `s` asynchronously.  Returns a Playback handle; call it to stop.

    The device is opened before this returns, so "no sound card" style
    errors surface here rather than in the background thread.
    """
    device = device_factory(sample_rate, channel_count(s))
    try:
        handle = Playback(s, device, sample_rate, steps, block_seconds)
        return handle.start()
    except BaseException:
        device.close()
        raise
