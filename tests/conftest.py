"""Shared pytest fixtures for wavetools tests."""

import wave
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def default_parse_mode(monkeypatch):
    """Run every test with the default (lenient) version parse mode."""
    monkeypatch.delenv("WAVETOOLS_VERSION_PARSE_MODE", raising=False)


@pytest.fixture
def make_wav(tmp_path):
    """Factory writing 16-bit PCM WAV files into tmp_path.

    Args (of the returned callable):
        name: File name inside tmp_path.
        samples: Interleaved int16 sample values.
        sample_rate: Frames per second (default 22050).
        channels: Channel count (default 1).

    Returns:
        Path to the written file.
    """

    def _make(name, samples, sample_rate=22050, channels=1) -> Path:
        path = tmp_path / name
        with wave.open(str(path), "wb") as wf:
            wf.setnchannels(channels)
            wf.setsampwidth(2)
            wf.setframerate(sample_rate)
            wf.writeframes(np.asarray(samples, dtype="<i2").tobytes())
        return path

    return _make


@pytest.fixture
def sample_audio_file(make_wav):
    """One second of silence, mono, 22050 Hz."""
    return make_wav("silence.wav", [0] * 22050)
