"""Logger facade and process-wide accessors.

This module contains the public API:
- SpectralLogger: Owns the channel, sink and worker of one logger
- get_instance(): Lazily build the process-wide logger exactly once
- configure(): Choose settings before the first get_instance()
- set_instance(): Install a logger built elsewhere (tests)
- clear_logger_state(): Dispose and forget the process-wide logger

Lifecycle of a SpectralLogger: constructed once (starting its worker),
optionally flushed once, disposed once. A disposed logger rejects every
submission; build a new one instead of reusing it.
"""

import asyncio
import atexit
import sys
from pathlib import Path
from typing import TextIO

from spectral_logger.channel import LogChannel
from spectral_logger.config import LoggerSettings, load_logger_settings
from spectral_logger.console import ConsoleRenderer
from spectral_logger.constants import DEFAULT_MAX_QUEUE_SIZE
from spectral_logger.diagnostics import get_logger
from spectral_logger.exceptions import (
    ConfigurationError,
    LoggerInitializationError,
)
from spectral_logger.formatters import format_entry
from spectral_logger.sink import SinkWriter
from spectral_logger.state import get_state
from spectral_logger.types import ErrorDetail, LogLevel
from spectral_logger.worker import WorkerLoop

logger = get_logger(__name__)

ErrorArg = BaseException | ErrorDetail | None


class SpectralLogger:
    """Asynchronous leveled logger writing to the console and one file.

    Producers format on their own thread and hand the line to a channel;
    a single worker thread does all console and file I/O. log() never
    blocks on I/O and log_async() suspends only until the channel accepts
    the line.

    Thread Safety:
        log(), log_async() and set_level() may be called from any thread
        or task. flush() and dispose() are meant for the thread that owns
        the logger's lifecycle.

    Example:
        >>> app_logger = SpectralLogger("logs/app.log", LogLevel.DEBUG)
        >>> app_logger.log(LogLevel.INFO, "service started")
        >>> await app_logger.log_async(LogLevel.WARNING, "cache cold")
        >>> await app_logger.flush()
        >>> app_logger.dispose()

    """

    def __init__(
        self,
        log_file: Path | str,
        level: LogLevel | int | str = LogLevel.INFO,
        *,
        console: bool = True,
        console_stream: TextIO | None = None,
        use_colors: bool | None = None,
        fsync: bool = False,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ) -> None:
        """Open the log file and start the worker.

        Args:
            log_file: Sink file; missing parent directories are created
            level: Initial threshold
            console: Echo entries to the console
            console_stream: Console stream, sys.stdout when None
            use_colors: Force console colors on/off, None for TTY detection
            fsync: Force every line to disk
            max_queue_size: Channel capacity, 0 for unbounded

        Raises:
            ConfigurationError: If level is invalid
            LoggerInitializationError: If the log file cannot be created

        """
        self._initialized = False
        self._disposed = False
        self._flush_started = False
        self._worker: WorkerLoop | None = None

        self._level = LogLevel.parse(level)
        self.log_file = Path(log_file).expanduser()
        logger.debug("Initializing logger for %s", self.log_file)

        self._channel = LogChannel(max_queue_size)
        self._sink = SinkWriter(self.log_file, fsync=fsync)
        self._console = (
            ConsoleRenderer(console_stream, use_colors=use_colors)
            if console
            else None
        )
        self._worker = WorkerLoop(self._channel, self._sink, self._console)
        try:
            self._worker.start()
        except LoggerInitializationError as e:
            logger.critical("Fatal error initializing logger: %s", e)
            raise

        self._initialized = True

    @classmethod
    def from_settings(cls, settings: LoggerSettings) -> "SpectralLogger":
        """Build a logger from loaded settings."""
        return cls(
            settings.log_file,
            settings.level,
            console=settings.console,
            use_colors=settings.use_colors,
            fsync=settings.fsync,
            max_queue_size=settings.max_queue_size,
        )

    def __repr__(self) -> str:
        """Return a short description with file and level."""
        return (
            f"{type(self).__name__}(log_file={str(self.log_file)!r}, "
            f"level={self._level.name})"
        )

    @property
    def level(self) -> LogLevel:
        """Current threshold; entries below it are dropped."""
        return self._level

    @property
    def is_active(self) -> bool:
        """Whether submissions are currently accepted."""
        return (
            self._initialized
            and not self._disposed
            and not self._channel.closed
        )

    @property
    def pending(self) -> int:
        """Number of lines waiting for the worker."""
        return len(self._channel)

    def set_level(self, level: LogLevel | int | str) -> None:
        """Set the global threshold.

        Raises:
            ConfigurationError: If level is invalid

        """
        self._level = LogLevel.parse(level)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Whether an entry at level would pass the threshold."""
        return level >= self._level

    def _prepare(
        self, level: LogLevel, message: str, error: ErrorArg
    ) -> str | None:
        if not self._initialized or self._disposed:
            logger.warning("Logger not properly initialized; entry dropped")
            return None
        if level < self._level:
            return None
        try:
            return format_entry(level, message, error)
        except Exception:
            logger.exception("Error formatting log entry")
            return None

    def log(
        self, level: LogLevel, message: str, error: ErrorArg = None
    ) -> bool:
        """Submit an entry without blocking.

        Args:
            level: Entry severity
            message: Entry text
            error: Exception or ErrorDetail to attach

        Returns:
            True if the entry was queued; False if it was filtered out or
            dropped (the reason is reported on the diagnostic channel)

        """
        line = self._prepare(level, message, error)
        if line is None:
            return False
        if not self._channel.enqueue(line):
            logger.warning("Could not write to log channel; entry dropped")
            return False
        return True

    async def log_async(
        self, level: LogLevel, message: str, error: ErrorArg = None
    ) -> bool:
        """Submit an entry, suspending only until the channel accepts it.

        File and console I/O happen later on the worker thread.

        Returns:
            True if the entry was queued, False otherwise

        """
        line = self._prepare(level, message, error)
        if line is None:
            return False
        if not await self._channel.enqueue_async(line):
            logger.warning("Could not write to log channel; entry dropped")
            return False
        return True

    def debug(self, message: str, error: ErrorArg = None) -> bool:
        """Submit a DEBUG entry."""
        return self.log(LogLevel.DEBUG, message, error)

    def info(self, message: str, error: ErrorArg = None) -> bool:
        """Submit an INFO entry."""
        return self.log(LogLevel.INFO, message, error)

    def warning(self, message: str, error: ErrorArg = None) -> bool:
        """Submit a WARNING entry."""
        return self.log(LogLevel.WARNING, message, error)

    def error(self, message: str, error: ErrorArg = None) -> bool:
        """Submit an ERROR entry."""
        return self.log(LogLevel.ERROR, message, error)

    def exception(self, message: str) -> bool:
        """Submit an ERROR entry carrying the exception being handled."""
        return self.log(LogLevel.ERROR, message, sys.exc_info()[1])

    def _begin_flush(self) -> bool:
        if not self._initialized or self._disposed:
            logger.warning("Logger not properly initialized; nothing to flush")
            return False
        if self._flush_started:
            logger.warning("Flush already performed for %s", self.log_file)
            return False
        self._flush_started = True
        self._channel.close()
        return True

    def _finish_flush(self, drained: bool) -> None:  # noqa: FBT001
        if not drained:
            logger.warning(
                "Log processing stopped before the queue was drained"
            )
            return
        logger.debug(
            "Log file %s flushed (%s bytes)",
            self.log_file,
            self._sink.size(),
        )

    async def flush(self) -> None:
        """Close the channel and wait until every queued entry is written.

        Only the first call per logger does anything; the channel stays
        closed afterwards, so later submissions are dropped. There is no
        internal timeout: wrap the call in asyncio.wait_for() if needed.
        """
        if not self._begin_flush():
            return
        drained = await asyncio.wrap_future(self._channel.drain_completion)
        self._finish_flush(drained)

    def shutdown(self) -> None:
        """Drain synchronously, then dispose. For non-async callers."""
        if self._begin_flush():
            self._finish_flush(self._channel.drain_completion.result())
        self.dispose()

    def dispose(self) -> None:
        """Stop the worker without draining and release the log file.

        Entries still queued are abandoned; call flush() first to keep
        them. Safe to call repeatedly and after a failed start.
        """
        if self._disposed:
            return
        self._disposed = True
        logger.debug("Disposing logger for %s", self.log_file)
        if self._worker is not None:
            self._worker.cancel()
        self._sink.close()
        self._channel.close()

    def __enter__(self) -> "SpectralLogger":
        """Return self; the logger is disposed on exit."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Dispose the logger."""
        self.dispose()

    async def __aenter__(self) -> "SpectralLogger":
        """Return self; the logger is flushed and disposed on exit."""
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Flush pending entries, then dispose."""
        try:
            await self.flush()
        finally:
            self.dispose()


def configure(
    settings: LoggerSettings | None = None, **overrides: object
) -> LoggerSettings:
    """Set the settings used by the first get_instance() call.

    Args:
        settings: Base settings; load_logger_settings() when None
        **overrides: LoggerSettings fields to replace

    Returns:
        The stored settings

    Raises:
        ConfigurationError: If the process-wide logger already exists or
            an override is invalid

    """
    state = get_state()
    with state.lock:
        if state.instance is not None:
            msg = "process-wide logger already created"
            raise ConfigurationError(msg)
        base = settings or load_logger_settings()
        state.settings = base.with_overrides(**overrides) if overrides else base
        return state.settings


def get_instance() -> SpectralLogger:
    """Return the process-wide logger, creating it on first use.

    Concurrent first callers construct exactly one logger. If construction
    fails, the error propagates and the next call tries again.

    Raises:
        LoggerInitializationError: If the log file cannot be created
        ConfigurationError: If the settings are invalid

    """
    state = get_state()
    instance = state.instance
    if instance is not None:
        return instance
    with state.lock:
        if state.instance is None:
            settings = state.settings or load_logger_settings()
            state.instance = SpectralLogger.from_settings(settings)
        return state.instance


def set_instance(instance: SpectralLogger | None) -> SpectralLogger | None:
    """Replace the process-wide logger, returning the previous one.

    The previous logger is not disposed; that is up to the caller.
    """
    state = get_state()
    with state.lock:
        previous, state.instance = state.instance, instance
        return previous


def clear_logger_state() -> None:
    """Dispose the process-wide logger and forget configured settings.

    Intended for tests. Queued entries of the old logger are abandoned.
    """
    state = get_state()
    with state.lock:
        instance, state.instance = state.instance, None
        state.settings = None
    if instance is not None:
        instance.dispose()


def _shutdown_at_exit() -> None:
    """Drain and dispose the process-wide logger at interpreter exit."""
    state = get_state()
    with state.lock:
        instance, state.instance = state.instance, None
    if instance is not None:
        instance.shutdown()


atexit.register(_shutdown_at_exit)
