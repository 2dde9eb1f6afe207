"""wavetools - WAV metadata and sample reading.

Uses only the stdlib wave module for headers; sample decoding goes through
numpy. Non-WAV files get a format guess from their extension only.
"""

import logging
import wave
from dataclasses import dataclass
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

# numpy dtypes for PCM sample widths in bytes (8-bit WAV is unsigned)
_PCM_DTYPES = {1: np.uint8, 2: np.int16, 4: np.int32}


@dataclass
class AudioMetadata:
    """Best-effort audio metadata. Fields are None when unknown."""

    duration_sec: float | None = None
    sample_rate: int | None = None
    channels: int | None = None
    sample_width: int | None = None
    format_guess: str | None = None


def guess_format_from_extension(filename: str) -> str | None:
    """Lowercase extension without the dot, or None."""
    ext = Path(filename).suffix.lower().lstrip(".")
    return ext if ext else None


def extract_audio_metadata(path: str | Path) -> AudioMetadata:
    """Extract metadata from an audio file.

    Never raises: unreadable WAV files keep only the format guess.

    Args:
        path: Path to the audio file.

    Returns:
        AudioMetadata with the available fields filled in.
    """
    path = Path(path)
    format_guess = guess_format_from_extension(str(path))
    if format_guess != "wav":
        return AudioMetadata(format_guess=format_guess)

    try:
        with wave.open(str(path), "rb") as wf:
            sample_rate = wf.getframerate()
            return AudioMetadata(
                duration_sec=wf.getnframes() / sample_rate if sample_rate > 0 else None,
                sample_rate=sample_rate,
                channels=wf.getnchannels(),
                sample_width=wf.getsampwidth(),
                format_guess="wav",
            )
    except (wave.Error, EOFError, OSError) as e:
        logger.warning("Could not read WAV header of %s: %s", path, e)
        return AudioMetadata(format_guess=format_guess)


def wav_duration_seconds(path: str | Path) -> float:
    """Duration of a WAV file in seconds.

    Raises:
        ValueError: If the file is not a readable WAV with a sample rate.
    """
    metadata = extract_audio_metadata(path)
    if metadata.duration_sec is None:
        raise ValueError(f"Cannot determine WAV duration of {path}")
    return metadata.duration_sec


def read_wav_samples(path: str | Path, channel: int = 0) -> np.ndarray:
    """Read one channel of a PCM WAV file as int64 samples.

    Args:
        path: Path to the WAV file.
        channel: Zero-based channel index.

    Returns:
        1-D int64 array. 8-bit data is re-centred around zero.

    Raises:
        ValueError: If the sample width is unsupported or channel is out of range.
        wave.Error: If the file is not a WAV file.
    """
    with wave.open(str(path), "rb") as wf:
        width = wf.getsampwidth()
        channels = wf.getnchannels()
        frames = wf.readframes(wf.getnframes())

    dtype = _PCM_DTYPES.get(width)
    if dtype is None:
        raise ValueError(f"Unsupported sample width {width} bytes in {path}")
    if not 0 <= channel < channels:
        raise ValueError(f"Channel {channel} out of range for {channels}-channel file {path}")

    samples = np.frombuffer(frames, dtype=np.dtype(dtype).newbyteorder("<"))
    samples = samples[channel::channels].astype(np.int64)
    if width == 1:
        samples -= 128
    return samples


__all__ = [
    "AudioMetadata",
    "extract_audio_metadata",
    "guess_format_from_extension",
    "read_wav_samples",
    "wav_duration_seconds",
]
