"""Append-only file sink used by the worker.

Every line is followed by a flush so a crash loses at most the line being
written. With fsync enabled the data is also forced to disk, trading
throughput for durability on long-running jobs.

A SinkWriter belongs to one worker thread; producers never touch it.
"""

import contextlib
import os
from pathlib import Path
from typing import TextIO

from spectral_logger.constants import LOG_FILE_ENCODING, LOG_FILE_START_MARKER
from spectral_logger.diagnostics import get_logger
from spectral_logger.exceptions import SinkError

logger = get_logger(__name__)


class SinkWriter:
    """Writes lines to a single log file opened in append mode."""

    def __init__(self, path: Path | str, *, fsync: bool = False) -> None:
        """Initialize the writer without touching the filesystem.

        Args:
            path: Log file path
            fsync: Call os.fsync after every flushed line

        """
        self.path = Path(path)
        self.fsync = fsync
        self._file: TextIO | None = None

    @property
    def is_open(self) -> bool:
        """Whether a file handle is currently held."""
        return self._file is not None

    def _open_handle(self) -> TextIO:
        return self.path.open("a", encoding=LOG_FILE_ENCODING)

    def _create_with_marker(self) -> None:
        # "x" fails instead of truncating if the file appeared meanwhile
        with self.path.open("x", encoding=LOG_FILE_ENCODING) as f:
            f.write(f"{LOG_FILE_START_MARKER}\n")

    def open(self) -> None:
        """Create the parent directory if needed and open the file.

        If the first open fails, a missing file is created with a start
        marker and the open is tried once more. An existing file is never
        truncated.

        Raises:
            SinkError: If the directory or file cannot be created

        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"cannot create log directory: {e}"
            raise SinkError(msg, str(self.path.parent)) from e

        try:
            self._file = self._open_handle()
        except OSError as first_error:
            logger.warning(
                "Could not open log file %s (%s); trying to create it manually",
                self.path,
                first_error,
            )
            try:
                if not self.path.exists():
                    self._create_with_marker()
                self._file = self._open_handle()
            except OSError as e:
                msg = f"cannot create log file: {e}"
                raise SinkError(msg, str(self.path)) from e

        logger.debug("Log file opened: %s", self.path)

    def _write_once(self, line: str) -> None:
        if self._file is None:
            msg = "log file is not open"
            raise ValueError(msg)
        self._file.write(f"{line}\n")
        self._file.flush()
        if self.fsync:
            os.fsync(self._file.fileno())

    def write(self, line: str) -> bool:
        """Append one line, reopening the file and retrying once on failure.

        Args:
            line: Formatted line without trailing newline

        Returns:
            True if the line was written, False if it was dropped

        """
        try:
            self._write_once(line)
        except (OSError, ValueError) as e:
            logger.warning(
                "Log write failed (%s); reopening %s", e, self.path
            )
        else:
            return True

        try:
            self.reopen()
            self._write_once(line)
        except (OSError, ValueError) as e:
            logger.error(
                "Dropped log entry after retry on %s: %s", self.path, e
            )
            return False
        return True

    def reopen(self) -> None:
        """Drop the current handle and open the same path again.

        Text still buffered in the old handle is discarded rather than
        flushed, so a retried line is not written twice.

        Raises:
            OSError: If the file cannot be reopened

        """
        self._discard()
        self._file = self._open_handle()

    def _discard(self) -> None:
        handle, self._file = self._file, None
        if handle is None:
            return
        # Closing the raw file first makes the wrapper skip its final flush
        with contextlib.suppress(OSError, ValueError, AttributeError):
            handle.buffer.raw.close()
        with contextlib.suppress(OSError, ValueError):
            handle.close()

    def flush(self) -> None:
        """Flush the handle if open; errors are ignored."""
        if self._file is None:
            return
        with contextlib.suppress(OSError, ValueError):
            self._file.flush()

    def close(self) -> None:
        """Close the handle; safe to call repeatedly."""
        handle, self._file = self._file, None
        if handle is None:
            return
        with contextlib.suppress(OSError, ValueError):
            handle.close()

    def size(self) -> int | None:
        """Return the file size in bytes, or None if it does not exist."""
        try:
            return self.path.stat().st_size
        except OSError:
            return None
