"""
Quick numeric check of an audio file through the streaming decoder.
Usage: python tools/quick_check_sound.py path/to/file.wav [--seconds 5]

Prints the container's format, rate, channel count and duration, then the
per-channel peak / rms / std of the first few seconds as the decoder sees
them (values in [-1.0, 1.0)).
"""
import argparse
import logging
import sys

import numpy as np

from CTSE.errors import SoundError
from CTSE.SDM.file_sound import read_sound
from CTSE.SGM.signal import sample

DIVIDER = "=" * 60


def decode_head(s, seconds):
    """First `seconds` of `s` at its own rate, shape (frames, channels)."""
    n = min(int(seconds * s.sample_rate), int(s.duration * s.sample_rate))
    data = np.empty((n, s.channels), dtype=np.float64)
    for k in range(n):
        data[k] = sample(s, k / s.sample_rate)
    return data


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Streaming decoder quick check")
    parser.add_argument("path", help="Audio file (any format libsndfile reads)")
    parser.add_argument(
        "--seconds", type=float, default=5.0,
        help="How much of the start of the file to measure, default 5",
    )
    parser.add_argument("--verbose", action="store_true", help="Log decoder activity")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        with read_sound(args.path) as s:
            print(DIVIDER)
            print(f"File        : {args.path}")
            print(f"Format      : {s.format}/{s.subtype}")
            print(f"Sample rate : {s.sample_rate} Hz")
            print(f"Channels    : {s.channels}")
            print(f"Duration    : {s.duration:.3f} s")
            print(DIVIDER)

            data = decode_head(s, args.seconds)
            print(f"First {len(data) / s.sample_rate:.2f} s ({len(data)} frames):")
            if len(data) == 0:
                print("  (empty)")
            for i in range(s.channels):
                ch   = data[:, i]
                if len(ch) == 0:
                    break
                peak = np.max(np.abs(ch))
                rms  = np.sqrt(np.mean(ch ** 2))
                std  = np.std(ch)
                print(f"  Ch{i}: peak={peak:.3f}  rms={rms:.3f}  std={std:.3f}")
            print(DIVIDER)
    except SoundError as exc:
        print(f"[!!] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
