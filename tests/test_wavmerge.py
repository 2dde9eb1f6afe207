"""Tests for wavetools.wavmerge module."""

import wave

import numpy as np
import pytest

from wavetools.utils.audio_meta import read_wav_samples
from wavetools.wavmerge import (
    COPY_BLOCK_FRAMES,
    WavMergeError,
    WavParamsMismatchError,
    merge_wavs,
    scan_wavs,
)


class TestScanWavs:
    """Tests for scan_wavs function."""

    def test_reports_each_duration(self, make_wav):
        """Every input gets its own frame count and duration."""
        a = make_wav("a.wav", [0] * 22050)
        b = make_wav("b.wav", [0] * 11025)

        wav_format, scanned = scan_wavs([a, b])

        assert wav_format.frame_rate == 22050
        assert [i.frames for i in scanned] == [22050, 11025]
        assert [str(i.duration) for i in scanned] == ["00:00:01.00", "00:00:00.50"]

    def test_no_inputs(self):
        with pytest.raises(WavMergeError):
            scan_wavs([])

    def test_unreadable_input(self, tmp_path):
        """A non-WAV input is a merge error, not a wave.Error."""
        bad = tmp_path / "bad.wav"
        bad.write_bytes(b"not a wav")
        with pytest.raises(WavMergeError) as exc_info:
            scan_wavs([bad])
        assert exc_info.value.path == str(bad)

    def test_missing_input(self, tmp_path):
        with pytest.raises(WavMergeError):
            scan_wavs([tmp_path / "absent.wav"])


class TestMergeWavs:
    """Tests for merge_wavs function."""

    def test_concatenates_frames(self, tmp_path, make_wav):
        """Output holds every input's frames in order."""
        a = make_wav("a.wav", [1, 2, 3])
        b = make_wav("b.wav", [4, 5])
        output = tmp_path / "out.wav"

        result = merge_wavs([a, b], output)

        assert read_wav_samples(output).tolist() == [1, 2, 3, 4, 5]
        assert result.total_frames == 5
        assert result.output == output

    def test_output_header(self, tmp_path, make_wav):
        """Output keeps the shared format."""
        a = make_wav("a.wav", [0, 0, 1, 1], sample_rate=8000, channels=2)
        b = make_wav("b.wav", [2, 2], sample_rate=8000, channels=2)
        output = tmp_path / "out.wav"

        merge_wavs([a, b], output)

        with wave.open(str(output), "rb") as wf:
            assert wf.getnchannels() == 2
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 8000
            assert wf.getnframes() == 3

    def test_inputs_longer_than_copy_block(self, tmp_path, make_wav):
        """Inputs are copied in blocks without losing frames."""
        samples = np.arange(COPY_BLOCK_FRAMES * 2 + 7) % 1000
        a = make_wav("a.wav", samples)
        output = tmp_path / "out.wav"

        result = merge_wavs([a, a], output)

        assert result.total_frames == samples.size * 2
        assert read_wav_samples(output).tolist() == samples.tolist() * 2

    def test_total_duration(self, tmp_path, make_wav):
        a = make_wav("a.wav", [0] * 22050)
        b = make_wav("b.wav", [0] * 33075)
        result = merge_wavs([a, b], tmp_path / "out.wav")
        assert result.total.to_seconds() == 2.5

    def test_mismatched_rate_rejected(self, tmp_path, make_wav):
        """Inputs with another frame rate fail before anything is written."""
        a = make_wav("a.wav", [0] * 10, sample_rate=22050)
        b = make_wav("b.wav", [0] * 10, sample_rate=44100)
        output = tmp_path / "out.wav"

        with pytest.raises(WavParamsMismatchError) as exc_info:
            merge_wavs([a, b], output)

        assert exc_info.value.error_code == "WAV_PARAMS_MISMATCH"
        assert exc_info.value.path == str(b)
        assert not output.exists()

    def test_mismatched_channels_rejected(self, tmp_path, make_wav):
        a = make_wav("a.wav", [0] * 10)
        b = make_wav("b.wav", [0] * 10, channels=2)
        with pytest.raises(WavParamsMismatchError):
            merge_wavs([a, b], tmp_path / "out.wav")

    def test_mismatch_is_value_error(self, tmp_path, make_wav):
        a = make_wav("a.wav", [0] * 10, sample_rate=8000)
        b = make_wav("b.wav", [0] * 10, sample_rate=16000)
        with pytest.raises(ValueError):
            merge_wavs([a, b], tmp_path / "out.wav")

    def test_failed_merge_keeps_existing_output(self, tmp_path, make_wav, monkeypatch):
        """A failure while copying leaves the old output and no temp file."""
        a = make_wav("a.wav", [1, 2, 3])
        output = tmp_path / "out.wav"
        output.write_bytes(b"old")

        def fail(self, data):
            raise OSError("disk full")

        monkeypatch.setattr(wave.Wave_write, "writeframesraw", fail)
        with pytest.raises(OSError):
            merge_wavs([a], output)

        assert output.read_bytes() == b"old"
        assert not (tmp_path / "out.wav.tmp").exists()

    def test_replaces_existing_output(self, tmp_path, make_wav):
        a = make_wav("a.wav", [7, 8])
        output = tmp_path / "out.wav"
        output.write_bytes(b"old")

        merge_wavs([a], output)

        assert read_wav_samples(output).tolist() == [7, 8]
