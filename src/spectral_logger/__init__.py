"""Process-wide asynchronous logger with a console echo and a file sink.

Producers submit leveled entries from any thread or asyncio task; one
background worker writes them, in submission order, to the console
(colored by level) and to an append-only UTF-8 file flushed after every
line.

Architecture:
    log() / log_async() → format_entry() → LogChannel → WorkerLoop thread
                                                            ↓
                                             ConsoleRenderer + SinkWriter

Usage:
    Process-wide logger:
        >>> from spectral_logger import LogLevel, configure, get_instance
        >>> configure(log_file="logs/service.log", level="DEBUG")
        >>> log = get_instance()
        >>> log.log(LogLevel.INFO, "started")
        >>> await log.log_async(LogLevel.ERROR, "request failed", exc)
        >>> await log.flush()  # every entry above is now on disk
        >>> log.dispose()

    Isolated instance (tests, tools):
        >>> from spectral_logger import SpectralLogger
        >>> async with SpectralLogger(tmp_path / "t.log") as log:
        ...     log.info("hello")

Flush vs dispose:
    flush() closes the queue and waits for every submitted entry to be
    written. dispose() stops the worker immediately and may abandon
    queued entries. Call flush() at most once per logger.

Environment Variables:
    SPECTRAL_LOG_FILE, SPECTRAL_LOG_DIR, SPECTRAL_LOG_LEVEL,
    SPECTRAL_LOG_CONFIG: Settings for the process-wide logger
    SPECTRAL_DIAGNOSTIC_LEVEL: Threshold of the logger's own diagnostics
        written to stderr (default WARNING)
"""

from spectral_logger.channel import LogChannel
from spectral_logger.config import LoggerSettings, load_logger_settings
from spectral_logger.console import ConsoleRenderer
from spectral_logger.exceptions import (
    ConfigurationError,
    LoggerInitializationError,
    SinkError,
    SpectralLoggerError,
)
from spectral_logger.formatters import format_entry, parse_level, render_entry
from spectral_logger.logger import (
    SpectralLogger,
    clear_logger_state,
    configure,
    get_instance,
    set_instance,
)
from spectral_logger.sink import SinkWriter
from spectral_logger.types import ErrorDetail, LogEntry, LogLevel
from spectral_logger.worker import WorkerLoop, WorkerState

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ConsoleRenderer",
    "ErrorDetail",
    "LogChannel",
    "LogEntry",
    "LogLevel",
    "LoggerInitializationError",
    "LoggerSettings",
    "SinkError",
    "SinkWriter",
    "SpectralLogger",
    "SpectralLoggerError",
    "WorkerLoop",
    "WorkerState",
    "__version__",
    "clear_logger_state",
    "configure",
    "format_entry",
    "get_instance",
    "load_logger_settings",
    "parse_level",
    "render_entry",
    "set_instance",
]
