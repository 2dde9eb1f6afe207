"""wavetools - Silence detection for PCM audio.

Frames are read in fixed blocks (SILENCE_BLOCK_FRAMES, default 1024). Each
sample is scaled to a 32-bit full range and divided by the sample rate,
truncating toward zero; a block's level is the mean absolute value of
those quotients. Blocks below the threshold (WAVETOOLS_SILENCE_THRESHOLD,
default 70) are silent, and consecutive silent blocks form one region.

Regions are reported in frames, end exclusive:

    silence from: 44032 to 66150
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from wavetools import config
from wavetools.utils.audio_meta import extract_audio_metadata, read_wav_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SilentRegion:
    """A run of silent frames, end exclusive."""

    start_frame: int
    end_frame: int

    def duration_seconds(self, sample_rate: int) -> float:
        return (self.end_frame - self.start_frame) / sample_rate


def block_levels(
    samples: np.ndarray,
    sample_rate: int,
    sample_width: int = 2,
    block_frames: int = config.SILENCE_BLOCK_FRAMES,
) -> np.ndarray:
    """Compute the level of each block of frames.

    Args:
        samples: 1-D signed samples of one channel.
        sample_rate: Frames per second.
        sample_width: Bytes per sample (1 to 4).
        block_frames: Frames per block; the last block may be shorter.

    Returns:
        1-D float array, one level per block.

    Raises:
        ValueError: If any argument is out of range or samples is not 1-D.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    if not 1 <= sample_width <= 4:
        raise ValueError(f"sample_width must be 1-4 bytes, got {sample_width}")
    if block_frames < 1:
        raise ValueError(f"block_frames must be >= 1, got {block_frames}")

    samples = np.asarray(samples, dtype=np.int64)
    if samples.ndim != 1:
        raise ValueError(f"samples must be 1-D, got shape {samples.shape}")
    if samples.size == 0:
        return np.empty(0, dtype=np.float64)

    scaled = np.abs(samples << (32 - 8 * sample_width)) // sample_rate
    starts = np.arange(0, samples.size, block_frames)
    lengths = np.diff(np.append(starts, samples.size))
    return np.add.reduceat(scaled, starts) / lengths


def find_silent_regions(
    samples: np.ndarray,
    sample_rate: int,
    sample_width: int = 2,
    block_frames: int = config.SILENCE_BLOCK_FRAMES,
    threshold: float | None = None,
) -> list[SilentRegion]:
    """Find runs of silent blocks.

    Args:
        samples: 1-D signed samples of one channel.
        sample_rate: Frames per second.
        sample_width: Bytes per sample before decoding.
        block_frames: Frames per block.
        threshold: Level below which a block is silent
            (default: config.SILENCE_THRESHOLD).

    Returns:
        Silent regions in order; adjacent silent blocks are merged.
    """
    threshold = config.SILENCE_THRESHOLD if threshold is None else threshold
    levels = block_levels(samples, sample_rate, sample_width, block_frames)
    total = int(np.asarray(samples).size)

    regions: list[SilentRegion] = []
    start = None
    for index, level in enumerate(levels):
        logger.debug("block %d level %.1f", index, level)
        if level < threshold:
            if start is None:
                start = index * block_frames
        elif start is not None:
            regions.append(SilentRegion(start, index * block_frames))
            start = None
    if start is not None:
        regions.append(SilentRegion(start, total))
    return regions


def find_wav_silence(
    path: str | Path,
    channel: int = 0,
    block_frames: int = config.SILENCE_BLOCK_FRAMES,
    threshold: float | None = None,
) -> tuple[list[SilentRegion], int]:
    """Find silent regions in one channel of a PCM WAV file.

    Returns:
        (regions, sample_rate).

    Raises:
        ValueError: If the file is not a readable PCM WAV file.
    """
    metadata = extract_audio_metadata(path)
    if not metadata.sample_rate or metadata.sample_width is None:
        raise ValueError(f"Cannot read WAV header of {path}")

    samples = read_wav_samples(path, channel)
    regions = find_silent_regions(
        samples, metadata.sample_rate, metadata.sample_width, block_frames, threshold
    )
    logger.info("Found %d silent region(s) in %s", len(regions), path)
    return regions, metadata.sample_rate


__all__ = ["SilentRegion", "block_levels", "find_silent_regions", "find_wav_silence"]
