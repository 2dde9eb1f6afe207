"""wavetools - Atomic file publishing.

Output documents (merge plans, waveform summaries) are published with:
1. Write to a temp path beside the final path
2. Flush + best-effort fsync
3. Rename temp -> final

The final path either holds a complete document or does not exist.

Streamed outputs (merged WAV files) use atomic_output_path(), which hands
out the temp path and does the rename once the caller's block succeeds.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def _write_all(fd: int, data: bytes) -> None:
    """Write every byte to a file descriptor, retrying short writes.

    Raises:
        OSError: If a write fails or makes no progress.
    """
    view = memoryview(data)
    while view:
        try:
            written = os.write(fd, view)
        except InterruptedError:
            continue
        if written == 0:
            raise OSError("os.write() made no progress")
        view = view[written:]


def _fsync_directory(dir_path: Path) -> None:
    """Best-effort fsync so the rename survives a crash."""
    try:
        fd = os.open(dir_path, os.O_RDONLY | os.O_DIRECTORY)
    except (OSError, AttributeError):
        # O_DIRECTORY is POSIX only
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def atomic_write_bytes(final_path: str | Path, data: bytes, temp_suffix: str = ".tmp") -> None:
    """Atomically write bytes to final_path, creating parent directories.

    A failed write removes its temp file and leaves final_path untouched.

    Raises:
        OSError: If directory creation, write, or rename fails.
    """
    final_path = Path(final_path)
    temp_path = final_path.with_suffix(final_path.suffix + temp_suffix)
    final_path.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    try:
        _write_all(fd, data)
        os.fsync(fd)
    except OSError:
        os.close(fd)
        temp_path.unlink(missing_ok=True)
        raise
    os.close(fd)

    os.replace(temp_path, final_path)
    _fsync_directory(final_path.parent)


def atomic_write_text(
    final_path: str | Path,
    text: str,
    encoding: str = "utf-8",
    temp_suffix: str = ".tmp",
) -> None:
    """Atomically write text to final_path."""
    atomic_write_bytes(final_path, text.encode(encoding), temp_suffix)


@contextmanager
def atomic_output_path(final_path: str | Path, temp_suffix: str = ".tmp") -> Iterator[Path]:
    """Yield a temp path to write; rename it to final_path when the block exits cleanly.

    The caller writes and fsyncs the temp file. If the block raises, the temp
    file is removed and final_path is left untouched.

    Raises:
        OSError: If directory creation or rename fails.
    """
    final_path = Path(final_path)
    temp_path = final_path.with_suffix(final_path.suffix + temp_suffix)
    final_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        yield temp_path
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    os.replace(temp_path, final_path)
    _fsync_directory(final_path.parent)
