"""Tests for entry formatting and level parsing."""

import logging
from datetime import datetime

import pytest

from spectral_logger import ErrorDetail, LogLevel, format_entry, parse_level
from spectral_logger.formatters import DiagnosticFormatter

STAMP = datetime(2024, 5, 1, 12, 30, 45, 123456)


def test_format_entry_without_error():
    """A plain entry is one line with a millisecond timestamp."""
    line = format_entry(LogLevel.INFO, "service started", timestamp=STAMP)

    assert line == "2024-05-01 12:30:45.123 [Info] service started"


def test_format_entry_converts_message_to_string():
    """Non-string messages are rendered with str()."""
    line = format_entry(LogLevel.DEBUG, 42, timestamp=STAMP)

    assert line.endswith("[Debug] 42")


def test_format_entry_with_error_detail():
    """An attached error adds an Exception line and the stack."""
    detail = ErrorDetail("OSError", "disk full", 'File "a.py", line 1')

    line = format_entry(
        LogLevel.ERROR, "write failed", detail, timestamp=STAMP
    )

    assert line.split("\n") == [
        "2024-05-01 12:30:45.123 [Error] write failed",
        "Exception: OSError: disk full",
        'File "a.py", line 1',
    ]


def test_format_entry_with_unraised_exception_has_no_stack_line():
    """An exception that was never raised contributes no stack lines."""
    line = format_entry(
        LogLevel.WARNING, "odd", KeyError("k"), timestamp=STAMP
    )

    assert line.split("\n")[1:] == ["Exception: KeyError: 'k'"]


def test_format_entry_uses_current_time_by_default():
    """Without a timestamp the entry is stamped now."""
    before = datetime.now().replace(microsecond=0)

    line = format_entry(LogLevel.INFO, "now")

    stamp = datetime.strptime(line[:19], "%Y-%m-%d %H:%M:%S")
    assert stamp >= before


def test_level_round_trip_with_attached_error():
    """The level token of an error entry parses back to ERROR."""
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        line = format_entry(LogLevel.ERROR, "failure [Info]", e)

    assert parse_level(line) is LogLevel.ERROR


@pytest.mark.parametrize("level", list(LogLevel))
def test_parse_level_recovers_every_level(level):
    """Every level survives formatting."""
    assert parse_level(format_entry(level, "msg", timestamp=STAMP)) is level


@pytest.mark.parametrize(
    "line",
    ["", "no level here", "2024-05-01 12:30:45.123 [Trace] hi"],
)
def test_parse_level_returns_none_for_foreign_lines(line):
    """Lines without a known level token yield None."""
    assert parse_level(line) is None


def test_diagnostic_formatter_colors_and_restores_levelname():
    """DiagnosticFormatter colors the level name only while formatting."""
    record = logging.LogRecord(
        name="spectral_logger",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="hello",
        args=(),
        exc_info=None,
    )
    formatter = DiagnosticFormatter("%(levelname)s %(message)s")

    formatted = formatter.format(record)

    assert "\033[33mWARNING\033[0m hello" == formatted
    assert record.levelname == "WARNING"
