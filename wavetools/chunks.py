"""wavetools - Chunk file renaming.

Audio splitters write chunks as name.wav.chunkN, which most players will not
open. This module renames them to name.chunkN.wav:

    take.wav.chunk3 -> take.chunk3.wav

Renames use os.replace on the same directory. An existing target is never
overwritten; that chunk is skipped with a warning.
"""

from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CHUNK_MARKER = ".wav.chunk"


@dataclass(frozen=True)
class ChunkRename:
    """One planned or applied rename."""

    source: Path
    target: Path
    applied: bool = False


def chunk_target_name(name: str) -> str:
    """Move the .wav extension to the end of a chunk file name.

    Every ".wav" in the name is removed before ".wav" is appended.
    """
    return name.replace(".wav", "") + ".wav"


def find_chunk_files(prefix: str | Path) -> list[Path]:
    """Find files matching {prefix}*.wav.chunk*.

    Args:
        prefix: An existing directory, or a directory plus file name prefix,
            e.g. "recordings" or "recordings/take".

    Returns:
        Matching files, sorted.
    """
    prefix_path = Path(prefix)
    if prefix_path.is_dir():
        base, name_prefix = prefix_path, ""
    else:
        base, name_prefix = prefix_path.parent, prefix_path.name
    if not base.is_dir():
        return []
    return sorted(p for p in base.glob(f"{glob.escape(name_prefix)}*{CHUNK_MARKER}*") if p.is_file())


def rename_chunks(prefix: str | Path, dry_run: bool = False) -> list[ChunkRename]:
    """Rename every chunk file under prefix.

    Args:
        prefix: Passed to find_chunk_files().
        dry_run: Plan the renames without touching the filesystem.

    Returns:
        One ChunkRename per matched file; applied is False for dry runs
        and for skipped files.
    """
    renames = []
    for source in find_chunk_files(prefix):
        target = source.with_name(chunk_target_name(source.name))
        logger.debug("%s -> %s", source, target)

        if target.exists():
            logger.warning("Skipping %s: %s already exists", source, target)
            renames.append(ChunkRename(source, target))
            continue
        if dry_run:
            renames.append(ChunkRename(source, target))
            continue

        os.replace(source, target)
        logger.info("Renamed %s -> %s", source, target)
        renames.append(ChunkRename(source, target, applied=True))
    return renames


__all__ = ["CHUNK_MARKER", "ChunkRename", "chunk_target_name", "find_chunk_files", "rename_chunks"]
