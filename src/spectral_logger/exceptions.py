"""Exception classes for spectral-logger."""


class SpectralLoggerError(Exception):
    """Base exception for spectral-logger."""

    error_prefix: str = "Logger error"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional path or setting name the failure relates to.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class ConfigurationError(SpectralLoggerError):
    """Raised when a setting or log level is invalid."""

    error_prefix = "Invalid configuration"


class SinkError(SpectralLoggerError):
    """Raised when the log file cannot be created or opened."""

    error_prefix = "Log file unavailable"


class LoggerInitializationError(SpectralLoggerError):
    """Raised when the logger cannot start; the logger is unusable."""

    error_prefix = "Logger initialization failed"
