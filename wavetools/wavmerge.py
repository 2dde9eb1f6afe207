"""wavetools - Concatenate WAV files.

All inputs must share channel count, sample width, frame rate and
compression type; frames are copied in order without resampling. The
output is written to a temp file beside it and renamed into place, so a
failed merge never leaves a truncated WAV behind.
"""

from __future__ import annotations

import logging
import os
import wave
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from wavetools.durations import Duration
from wavetools.utils.atomic_io import atomic_output_path

logger = logging.getLogger(__name__)

# Frames copied per read
COPY_BLOCK_FRAMES = 4096


class WavMergeError(ValueError):
    """Raised when a set of WAV files cannot be merged."""

    error_code = "WAV_MERGE_FAILED"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{self.error_code}: {path}: {reason}")


class WavParamsMismatchError(WavMergeError):
    """An input's format differs from the first input's."""

    error_code = "WAV_PARAMS_MISMATCH"


@dataclass(frozen=True)
class WavFormat:
    """The parameters that must agree across merged inputs."""

    channels: int
    sample_width: int
    frame_rate: int
    comptype: str

    @classmethod
    def of(cls, wf: wave.Wave_read) -> WavFormat:
        return cls(wf.getnchannels(), wf.getsampwidth(), wf.getframerate(), wf.getcomptype())


@dataclass(frozen=True)
class WavInput:
    """One scanned input."""

    path: Path
    frames: int
    duration: Duration


@dataclass(frozen=True)
class WavMergeResult:
    """Inputs in merge order plus the output they were written to."""

    output: Path
    inputs: tuple[WavInput, ...]
    wav_format: WavFormat

    @property
    def total_frames(self) -> int:
        return sum(i.frames for i in self.inputs)

    @property
    def total(self) -> Duration:
        return sum((i.duration for i in self.inputs), Duration())


def _frames_duration(frames: int, frame_rate: int) -> Duration:
    return Duration.from_seconds(frames / frame_rate)


def scan_wavs(inputs: Sequence[str | Path]) -> tuple[WavFormat, list[WavInput]]:
    """Read the headers of every input and check they agree.

    Returns:
        (shared format, one WavInput per path in order).

    Raises:
        WavMergeError: If there are no inputs or one cannot be read.
        WavParamsMismatchError: If an input's format differs from the first.
    """
    if not inputs:
        raise WavMergeError("<inputs>", "no input files")

    shared: WavFormat | None = None
    scanned = []
    for path in map(Path, inputs):
        try:
            with wave.open(str(path), "rb") as wf:
                wav_format = WavFormat.of(wf)
                frames = wf.getnframes()
        except (wave.Error, EOFError, OSError) as e:
            raise WavMergeError(str(path), f"cannot read WAV header ({e})") from e

        if shared is None:
            if wav_format.frame_rate <= 0:
                raise WavMergeError(str(path), "frame rate is zero")
            shared = wav_format
        elif wav_format != shared:
            raise WavParamsMismatchError(str(path), f"format {wav_format} differs from {shared}")

        wav_input = WavInput(path, frames, _frames_duration(frames, wav_format.frame_rate))
        logger.info("%s is %.2f seconds", path, wav_input.duration.to_seconds())
        scanned.append(wav_input)
    return shared, scanned


def merge_wavs(inputs: Sequence[str | Path], output: str | Path) -> WavMergeResult:
    """Concatenate WAV files into output.

    Args:
        inputs: WAV files in playback order.
        output: Destination WAV path. An existing file is replaced only
            after the merge succeeds.

    Returns:
        WavMergeResult with per-input durations.

    Raises:
        WavMergeError: If the inputs are missing, unreadable or disagree.
        OSError: If the output cannot be written.
    """
    output = Path(output)
    wav_format, scanned = scan_wavs(inputs)
    result = WavMergeResult(output=output, inputs=tuple(scanned), wav_format=wav_format)
    logger.info("%s will be %.2f seconds", output, result.total.to_seconds())

    with atomic_output_path(output) as temp_path:
        with open(temp_path, "wb") as f:
            with wave.open(f, "wb") as out:
                out.setnchannels(wav_format.channels)
                out.setsampwidth(wav_format.sample_width)
                out.setframerate(wav_format.frame_rate)
                for wav_input in scanned:
                    with wave.open(str(wav_input.path), "rb") as src:
                        while block := src.readframes(COPY_BLOCK_FRAMES):
                            out.writeframesraw(block)
                    logger.debug("Copied %d frames from %s", wav_input.frames, wav_input.path)
            # wave patches the header sizes on close
            f.flush()
            os.fsync(f.fileno())

    logger.info("Merged %d file(s) into %s", len(scanned), output)
    return result


__all__ = [
    "COPY_BLOCK_FRAMES",
    "WavFormat",
    "WavInput",
    "WavMergeError",
    "WavMergeResult",
    "WavParamsMismatchError",
    "merge_wavs",
    "scan_wavs",
]
