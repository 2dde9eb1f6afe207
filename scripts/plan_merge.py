#!/usr/bin/env python3
"""Plan which short audio segments to merge into files of at most N seconds.

Durations come from HH:MM:SS.ff stamps on the command line, from WAV files
(--wav), or from stdin (one stamp per line) when neither is given. Each merge
set is printed; --output or --name also writes the versioned JSON plan.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from wavetools import config
from wavetools.durations import Duration
from wavetools.merge import build_merge_plan, plan_merge_sets, write_merge_plan
from wavetools.utils.audio_meta import wav_duration_seconds
from wavetools.utils.paths import merge_plan_path


def _collect_durations(stamps: Sequence[str], wav_files: Sequence[Path]) -> list[Duration]:
    durations = [Duration.parse(stamp) for stamp in stamps]
    durations.extend(Duration.from_seconds(wav_duration_seconds(p)) for p in wav_files)
    return durations


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Group segment durations into merge sets")
    parser.add_argument("stamps", nargs="*", help="Segment durations as HH:MM:SS.ff")
    parser.add_argument(
        "--wav",
        type=Path,
        action="append",
        default=[],
        help="WAV file whose duration is a segment (repeatable)",
    )
    parser.add_argument(
        "--max-sec",
        type=float,
        default=config.MERGE_MAX_SEC,
        help=f"Ceiling per merge set in seconds (default: {config.MERGE_MAX_SEC})",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--output", type=Path, help="Write the JSON plan to this path")
    output.add_argument(
        "--name",
        help="Write the JSON plan to data/out/<name>.merge_plan.v1.json",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    stamps = args.stamps
    if not stamps and not args.wav:
        stamps = [line.strip() for line in sys.stdin if line.strip()]

    try:
        durations = _collect_durations(stamps, args.wav)
        sets = plan_merge_sets(durations, args.max_sec)
    except ValueError as exc:
        print(f"Cannot plan merge: {exc}", file=sys.stderr)
        return 1

    for merge_set in sets:
        flag = " (oversized)" if merge_set.oversized else ""
        members = ", ".join(str(d) for d in merge_set.members)
        print(f"merge({merge_set.total}){flag}: {members}")

    output_path = args.output or (merge_plan_path(args.name) if args.name else None)
    if output_path:
        write_merge_plan(build_merge_plan(sets, args.max_sec), output_path)
        print(f"Saved plan to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
