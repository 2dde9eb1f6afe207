#!/usr/bin/env python3
"""Summarize a stream of sample values into a plottable min/max envelope.

Samples are read as whitespace-separated integers from stdin (or --input),
or from the first channel of a PCM WAV file with --wav. The envelope is
written as waveform_peaks.v1 JSON.
"""

from __future__ import annotations

import argparse
import logging
import sys
import wave
from collections.abc import Sequence
from pathlib import Path

from wavetools import config
from wavetools.utils.audio_meta import read_wav_samples
from wavetools.utils.paths import waveform_json_path
from wavetools.waveform import read_samples, summarize_waveform, write_waveform_json


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write a waveform peak summary")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", type=Path, help="Text file of samples (default: stdin)")
    source.add_argument("--wav", type=Path, help="PCM WAV file to sample")
    parser.add_argument(
        "--buckets",
        type=int,
        default=config.WAVEFORM_BUCKETS,
        help=f"Number of min/max buckets (default: {config.WAVEFORM_BUCKETS})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Destination JSON (default: data/out/<name>.waveform.v1.json)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    try:
        if args.wav:
            samples = read_wav_samples(args.wav)
            name = args.wav.stem
        elif args.input:
            with open(args.input, encoding="utf-8") as fh:
                samples = read_samples(fh)
            name = args.input.stem
        else:
            samples = read_samples(sys.stdin)
            name = "stdin"
        envelope = summarize_waveform(samples, args.buckets)
    except (OSError, wave.Error, ValueError) as exc:
        print(f"Cannot summarize waveform: {exc}", file=sys.stderr)
        return 1

    output_path = args.output or waveform_json_path(name)
    write_waveform_json(envelope, output_path)
    print(f"Saved {envelope.sample_count} samples as {len(envelope.mins)} buckets to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
