"""Formatting for log entries and diagnostic records.

This module provides:
- format_entry(): Renders a submission to the line placed on the queue
- parse_level(): Recovers the level token from a rendered line
- DiagnosticFormatter: Colors level names of operational diagnostics

Entry lines look like::

    2024-05-01 12:30:45.123 [Warning] Cache outdated

and, when an exception is attached::

    2024-05-01 12:30:45.123 [Error] Request failed
    Exception: ConnectionError: peer reset
      File "client.py", line 12, in send
        ...
"""

import logging
import re
from datetime import datetime

from spectral_logger.constants import (
    ENTRY_TIMESTAMP_FORMAT,
    EXCEPTION_LINE_PREFIX,
    LOG_COLORS,
)
from spectral_logger.types import ErrorDetail, LogEntry, LogLevel

_LEVEL_TOKEN = re.compile(r"^\S+ \S+ \[(?P<label>\w+)\]")


def render_entry(entry: LogEntry) -> str:
    """Render an entry to its line form.

    Args:
        entry: The entry to render

    Returns:
        Line text without a trailing newline; multi-line when the entry
        carries an error

    """
    # %f is microseconds, keep milliseconds
    stamp = entry.timestamp.strftime(ENTRY_TIMESTAMP_FORMAT)[:-3]
    lines = [f"{stamp} [{entry.level.label}] {entry.message}"]
    if entry.error is not None:
        lines.append(
            f"{EXCEPTION_LINE_PREFIX}: {entry.error.kind}: "
            f"{entry.error.message}"
        )
        if entry.error.stack:
            lines.append(entry.error.stack)
    return "\n".join(lines)


def format_entry(
    level: LogLevel,
    message: str,
    error: BaseException | ErrorDetail | None = None,
    *,
    timestamp: datetime | None = None,
) -> str:
    """Build and render an entry in one step.

    Args:
        level: Entry severity
        message: Entry text; non-string values are converted with str()
        error: Exception or pre-captured ErrorDetail to attach
        timestamp: Entry time, defaults to now (local time)

    Returns:
        Rendered line

    """
    if isinstance(error, BaseException):
        error = ErrorDetail.from_exception(error)
    entry = LogEntry(
        timestamp=timestamp or datetime.now(),
        level=level,
        message=str(message),
        error=error,
    )
    return render_entry(entry)


def parse_level(line: str) -> LogLevel | None:
    """Return the level encoded in a rendered line, or None if absent."""
    match = _LEVEL_TOKEN.match(line)
    if match is None:
        return None
    label = match.group("label").upper()
    if label not in LogLevel.__members__:
        return None
    return LogLevel[label]


class DiagnosticFormatter(logging.Formatter):
    """Formatter for operational diagnostics with colored level names.

    Colors are applied to a temporary copy of the level name and the
    record is restored afterwards, so other handlers see the plain name.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a diagnostic record, coloring its level name."""
        if record.levelname in LOG_COLORS:
            color = LOG_COLORS[record.levelname]
            reset = LOG_COLORS["RESET"]
            original_levelname = record.levelname
            record.levelname = f"{color}{record.levelname}{reset}"
            try:
                return super().format(record)
            finally:
                record.levelname = original_levelname

        return super().format(record)
