#!/usr/bin/env python3
"""Print the silent regions of a WAV file as frame offsets."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from wavetools import config
from wavetools.silence import find_wav_silence


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find silent regions in a WAV file")
    parser.add_argument("wav", type=Path, help="Input WAV file")
    parser.add_argument("--channel", type=int, default=0, help="Channel to scan (default: 0)")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help=f"Silence level threshold (default: {config.SILENCE_THRESHOLD})",
    )
    parser.add_argument(
        "--block-frames",
        type=int,
        default=config.SILENCE_BLOCK_FRAMES,
        help=f"Frames per detection block (default: {config.SILENCE_BLOCK_FRAMES})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    try:
        regions, sample_rate = find_wav_silence(
            args.wav, args.channel, args.block_frames, args.threshold
        )
    except (ValueError, OSError) as exc:
        print(f"Cannot scan {args.wav}: {exc}", file=sys.stderr)
        return 1

    for region in regions:
        seconds = region.duration_seconds(sample_rate)
        print(f"silence from: {region.start_frame} to {region.end_frame} ({seconds:.2f}s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
