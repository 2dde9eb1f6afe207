#!/usr/bin/env python3
"""Compare two dotted version numbers.

Prints "<", "=" or ">" for A relative to B. Comparison is numeric per
component, so 1.2.3 < 1.12.3, and a strict prefix is smaller (1.2.3 < 1.2.3.5).

Non-numeric segments are read as 0 unless --strict is given or
WAVETOOLS_VERSION_PARSE_MODE=strict.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from wavetools.revision import InvalidInput, ParseMode, VersionNumber

SYMBOLS = {-1: "<", 0: "=", 1: ">"}


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare two dotted version numbers")
    parser.add_argument("a", help="First version, e.g. 1.2.3")
    parser.add_argument("b", help="Second version, e.g. 1.12.3")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject non-numeric segments instead of reading them as 0",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    mode = ParseMode.STRICT if args.strict else None

    try:
        a = VersionNumber(args.a, mode)
        b = VersionNumber(args.b, mode)
    except InvalidInput as exc:
        print(f"Invalid version: {exc}", file=sys.stderr)
        return 1

    print(f"{a} {SYMBOLS[a.compare(b)]} {b}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
