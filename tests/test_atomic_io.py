"""Tests for wavetools.utils.atomic_io module."""

import os
from unittest import mock

import pytest

from wavetools.utils.atomic_io import (
    _write_all,
    atomic_output_path,
    atomic_write_bytes,
    atomic_write_text,
)


class TestAtomicWriteBytes:
    """Tests for atomic_write_bytes function."""

    def test_creates_file(self, tmp_path):
        """Should create file with correct content."""
        path = tmp_path / "plan.json"
        atomic_write_bytes(path, b"{}")
        assert path.read_bytes() == b"{}"

    def test_creates_parent_directories(self, tmp_path):
        """Should create parent directories if they do not exist."""
        path = tmp_path / "data" / "out" / "plan.json"
        atomic_write_bytes(path, b"nested")
        assert path.read_bytes() == b"nested"

    def test_overwrites_existing_file(self, tmp_path):
        """Should atomically replace existing file."""
        path = tmp_path / "plan.json"
        path.write_bytes(b"old")
        atomic_write_bytes(path, b"new")
        assert path.read_bytes() == b"new"

    def test_temp_file_cleaned_up_on_success(self, tmp_path):
        """Temp file should not exist after successful write."""
        path = tmp_path / "plan.json"
        atomic_write_bytes(path, b"data")
        assert not path.with_suffix(".json.tmp").exists()

    def test_failed_write_keeps_final_and_removes_temp(self, tmp_path):
        """A failing fsync leaves the old file and no temp file."""
        path = tmp_path / "plan.json"
        path.write_bytes(b"old")

        with mock.patch("wavetools.utils.atomic_io.os.fsync", side_effect=OSError("disk")):
            with pytest.raises(OSError):
                atomic_write_bytes(path, b"new")

        assert path.read_bytes() == b"old"
        assert not path.with_suffix(".json.tmp").exists()


class TestAtomicWriteText:
    """Tests for atomic_write_text function."""

    def test_utf8_default(self, tmp_path):
        """Text is encoded as UTF-8 by default."""
        path = tmp_path / "notes.txt"
        atomic_write_text(path, "café")
        assert path.read_bytes() == "café".encode("utf-8")

    def test_custom_encoding(self, tmp_path):
        """Encoding can be overridden."""
        path = tmp_path / "notes.txt"
        atomic_write_text(path, "café", encoding="latin-1")
        assert path.read_bytes() == "café".encode("latin-1")


class TestWriteAll:
    """Tests for _write_all short-write handling."""

    def test_short_writes_are_retried(self, tmp_path):
        """Partial writes continue until all bytes are written."""
        written = []

        def short_write(fd, data):
            chunk = bytes(data[:2])
            written.append(chunk)
            return len(chunk)

        with mock.patch("wavetools.utils.atomic_io.os.write", side_effect=short_write):
            _write_all(3, b"abcdefg")

        assert b"".join(written) == b"abcdefg"

    def test_zero_write_raises(self):
        """A write that makes no progress raises OSError."""
        with mock.patch("wavetools.utils.atomic_io.os.write", return_value=0):
            with pytest.raises(OSError):
                _write_all(3, b"abc")

    def test_real_descriptor(self, tmp_path):
        """Writes through a real file descriptor."""
        path = tmp_path / "raw.bin"
        fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o644)
        try:
            _write_all(fd, b"payload")
        finally:
            os.close(fd)
        assert path.read_bytes() == b"payload"


class TestAtomicOutputPath:
    """Tests for atomic_output_path context manager."""

    def test_renames_on_success(self, tmp_path):
        """The temp file becomes the final file when the block exits."""
        path = tmp_path / "out" / "merged.wav"
        with atomic_output_path(path) as temp_path:
            assert temp_path == tmp_path / "out" / "merged.wav.tmp"
            assert not path.exists()
            temp_path.write_bytes(b"RIFF")

        assert path.read_bytes() == b"RIFF"
        assert not temp_path.exists()

    def test_error_keeps_final_and_removes_temp(self, tmp_path):
        """An exception in the block leaves the old file and no temp file."""
        path = tmp_path / "merged.wav"
        path.write_bytes(b"old")

        with pytest.raises(RuntimeError):
            with atomic_output_path(path) as temp_path:
                temp_path.write_bytes(b"partial")
                raise RuntimeError("boom")

        assert path.read_bytes() == b"old"
        assert not temp_path.exists()
