#!/usr/bin/env python3
"""Concatenate WAV files that share one format.

Usage: merge_wavs.py a1.wav a2.wav ... out.wav
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from wavetools.wavmerge import merge_wavs


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Concatenate WAV files into one")
    parser.add_argument("inputs", nargs="+", type=Path, help="Input WAV files in order")
    parser.add_argument("output", type=Path, help="Merged WAV file to write")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    try:
        result = merge_wavs(args.inputs, args.output)
    except (ValueError, OSError) as exc:
        print(f"Cannot merge: {exc}", file=sys.stderr)
        return 1

    for wav_input in result.inputs:
        print(f"{wav_input.path} is {wav_input.duration.to_seconds():.2f} seconds")
    print(f"{result.output} is {result.total_frames / result.wav_format.frame_rate:.2f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
