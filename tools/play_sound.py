"""
Play (or save) an audio file through a chain of signal combinators.

Usage:
    python tools/play_sound.py take1.flac
    python tools/play_sound.py take1.flac --start 10 --end 20 --fade-in 1 --fade-out 2
    python tools/play_sound.py take1.flac --pan 0.5 --gain 0.8 --save out/mono_centre.wav

The chain is always:  trim -> to_stereo -> pan -> gain -> fade_in -> fade_out
with each stage skipped when its flag is absent.  Ctrl-C stops playback.
"""
import argparse
import logging
import sys

from CTSE.errors import SoundError
from CTSE.SDM.file_sound import read_sound
from CTSE.SFM.constants import SAMPLE_RATE
from CTSE.SGM.combinators import fade_in, fade_out, gain, pan, to_stereo, trim
from CTSE.SOM.playback import play
from CTSE.SOM.wav_export import save

DIVIDER = "=" * 60


def build_chain(s, args):
    """Apply the combinators selected on the command line to `s`."""
    if args.start is not None or args.end is not None:
        start = args.start if args.start is not None else 0.0
        end   = args.end if args.end is not None else s.duration
        s = trim(s, start, end)
    if args.pan is not None:
        s = pan(to_stereo(s), args.pan)
    if args.gain is not None:
        s = gain(s, args.gain)
    if args.fade_in:
        s = fade_in(s, args.fade_in)
    if args.fade_out:
        s = fade_out(s, args.fade_out)
    return s


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Play or save a sound file through CTSE")
    parser.add_argument("path", help="Audio file (any format libsndfile reads)")
    parser.add_argument("--start", type=float, help="Trim start, seconds")
    parser.add_argument("--end", type=float, help="Trim end, seconds")
    parser.add_argument("--pan", type=float, help="Stereo pan amount 0.0-1.0 (1.0 swaps L/R)")
    parser.add_argument("--gain", type=float, help="Linear gain factor")
    parser.add_argument("--fade-in", type=float, default=0.0, help="Fade-in length, seconds")
    parser.add_argument("--fade-out", type=float, default=0.0, help="Fade-out length, seconds")
    parser.add_argument("--save", metavar="OUT.wav", help="Write a WAV file instead of playing")
    parser.add_argument(
        "--rate", type=int, default=SAMPLE_RATE,
        help=f"Output sample rate, default {SAMPLE_RATE}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log decoder and output activity")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        with read_sound(args.path) as source:
            s = build_chain(source, args)
            print(DIVIDER)
            print(f"Source   : {args.path}  ({source.duration:.3f} s, {source.channels} ch)")
            print(f"Output   : {s.duration:.3f} s, {s.channels} ch @ {args.rate} Hz")
            print(DIVIDER)

            if args.save:
                frames = save(s, args.save, sample_rate=args.rate)
                print(f"Saved {frames} frames to {args.save}")
                return 0

            handle = play(s, sample_rate=args.rate)
            try:
                handle.wait()
            except KeyboardInterrupt:
                print("Stopping ...")
                handle.stop()
                handle.wait()
            if handle.error is not None:
                print(f"[!!] Playback failed: {handle.error}")
                return 1
            print(f"Played {handle.frames_written}/{handle.total_frames} frames")
    except SoundError as exc:
        print(f"[!!] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
