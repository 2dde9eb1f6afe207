#!/usr/bin/env python3
"""Rename chunk files from name.wav.chunkN to name.chunkN.wav."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from wavetools.chunks import rename_chunks


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Rename name.wav.chunkN files to name.chunkN.wav")
    parser.add_argument(
        "prefix",
        nargs="?",
        default="",
        help="Directory or path prefix to search (default: current directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the renames without applying them",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    renames = rename_chunks(args.prefix, dry_run=args.dry_run)
    skipped = 0
    for rename in renames:
        print(f"{rename.source} -> {rename.target}")
        if not rename.applied and not args.dry_run:
            skipped += 1

    if skipped:
        print(f"{skipped} chunk(s) skipped: target already exists", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
