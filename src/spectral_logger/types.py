"""Value types shared across the logging pipeline.

LogLevel is the single ordering used for threshold filtering. ErrorDetail
and LogEntry are immutable snapshots taken on the producer side; once an
entry is rendered to a line nothing on the consumer side refers back to them.
"""

import builtins
import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from spectral_logger.exceptions import ConfigurationError

# Accepted aliases in addition to names and labels
_LEVEL_ALIASES: dict[str, str] = {
    "WARN": "WARNING",
}


class LogLevel(IntEnum):
    """Severity of an entry, ordered DEBUG < INFO < WARNING < ERROR.

    Values match the standard library logging levels so a LogLevel can be
    handed to code that expects those integers.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @property
    def label(self) -> str:
        """Return the token written between brackets, e.g. ``Warning``."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "LogLevel | int | str") -> "LogLevel":
        """Convert a level, its integer value, or its name to a LogLevel.

        Names are case-insensitive and may be either the enum name
        (``WARNING``) or the label (``Warning``).

        Args:
            value: Level to convert

        Returns:
            Matching LogLevel

        Raises:
            ConfigurationError: If the value names no known level

        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                msg = f"unknown log level value {value}"
                raise ConfigurationError(msg) from None
        if isinstance(value, str):
            name = value.strip().upper()
            name = _LEVEL_ALIASES.get(name, name)
            if name in cls.__members__:
                return cls[name]
        msg = f"unknown log level {value!r}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """Snapshot of an exception attached to an entry.

    Attributes:
        kind: Qualified exception class name
        message: str() of the exception
        stack: Formatted traceback, empty if the exception was never raised

    """

    kind: str
    message: str
    stack: str = ""

    @classmethod
    def from_exception(cls, error: BaseException) -> "ErrorDetail":
        """Capture kind, message and traceback of an exception."""
        error_type = type(error)
        module = error_type.__module__
        if module == builtins.__name__:
            kind = error_type.__qualname__
        else:
            kind = f"{module}.{error_type.__qualname__}"
        stack = "".join(traceback.format_tb(error.__traceback__))
        return cls(kind=kind, message=str(error), stack=stack.rstrip("\n"))


@dataclass(frozen=True, slots=True)
class LogEntry:
    """A single submitted entry before it is rendered to a line."""

    timestamp: datetime
    level: LogLevel
    message: str
    error: ErrorDetail | None = None
