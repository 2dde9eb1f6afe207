"""wavetools - Waveform peak summaries.

Turns a stream of sample values into a min/max envelope small enough to
plot: samples are split into at most N contiguous buckets and each bucket
keeps its minimum and maximum.

Input tokens are whitespace separated and coerced leniently ("12abc" is 12,
"abc" is 0), matching how the sample dumps were always read.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

import numpy as np

from wavetools import config
from wavetools.schemas import WaveformPeaks, validate_document
from wavetools.utils.atomic_io import atomic_write_text
from wavetools.utils.parsing import lenient_int

logger = logging.getLogger(__name__)


@dataclass
class WaveformEnvelope:
    """Per-bucket extremes of a sample stream."""

    sample_count: int
    bucket_size: int
    mins: np.ndarray
    maxs: np.ndarray

    def to_model(self) -> WaveformPeaks:
        return WaveformPeaks(
            computed_at=datetime.now(UTC),
            sample_count=self.sample_count,
            bucket_size=self.bucket_size,
            mins=[int(v) for v in self.mins],
            maxs=[int(v) for v in self.maxs],
        )


def read_samples(stream: TextIO) -> np.ndarray:
    """Read whitespace-separated samples from a text stream.

    Returns:
        1-D int64 array in stream order.
    """
    values = [lenient_int(token) for token in stream.read().split()]
    return np.asarray(values, dtype=np.int64)


def summarize_waveform(samples: np.ndarray, buckets: int | None = None) -> WaveformEnvelope:
    """Compute a min/max envelope.

    Args:
        samples: 1-D sample array.
        buckets: Maximum number of buckets (default: config.WAVEFORM_BUCKETS).
            Fewer samples than buckets gives one bucket per sample.

    Returns:
        WaveformEnvelope; empty input yields empty arrays.

    Raises:
        ValueError: If buckets < 1 or samples is not 1-D.
    """
    buckets = config.WAVEFORM_BUCKETS if buckets is None else buckets
    if buckets < 1:
        raise ValueError(f"buckets must be >= 1, got {buckets}")

    samples = np.asarray(samples, dtype=np.int64)
    if samples.ndim != 1:
        raise ValueError(f"samples must be 1-D, got shape {samples.shape}")

    n = samples.size
    if n == 0:
        empty = np.empty(0, dtype=np.int64)
        return WaveformEnvelope(sample_count=0, bucket_size=0, mins=empty, maxs=empty)

    bucket_size = -(-n // buckets)  # ceil division
    starts = np.arange(0, n, bucket_size)
    mins = np.minimum.reduceat(samples, starts)
    maxs = np.maximum.reduceat(samples, starts)

    logger.debug("Summarized %d samples into %d bucket(s) of %d", n, starts.size, bucket_size)
    return WaveformEnvelope(sample_count=n, bucket_size=bucket_size, mins=mins, maxs=maxs)


def write_waveform_json(envelope: WaveformEnvelope, path: str | Path) -> Path:
    """Validate and atomically publish an envelope as JSON.

    Returns:
        The path written.
    """
    path = Path(path)
    data = json.loads(envelope.to_model().model_dump_json())
    validate_document(data, "waveform_peaks")
    atomic_write_text(path, json.dumps(data) + "\n")
    logger.info("Wrote waveform summary (%d buckets) to %s", len(data["mins"]), path)
    return path


__all__ = ["WaveformEnvelope", "read_samples", "summarize_waveform", "write_waveform_json"]
