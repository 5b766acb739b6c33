"""Centralized constants module for spectral-logger.

Constants are grouped by concern and annotated with typing.Final so they
are treated as immutable.

Usage:
    from spectral_logger.constants import ENTRY_TIMESTAMP_FORMAT
"""

from typing import Final

# =============================================================================
# Entry format
# =============================================================================

# strftime format for entry timestamps; microseconds are cut to milliseconds
ENTRY_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S.%f"

# Prefix of the line describing an attached exception
EXCEPTION_LINE_PREFIX: Final[str] = "Exception"

# =============================================================================
# Sink defaults
# =============================================================================

DEFAULT_LOG_DIR_NAME: Final[str] = "logs"
DEFAULT_LOG_FILE_NAME: Final[str] = "application.log"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
LOG_FILE_ENCODING: Final[str] = "utf-8"

# Written by the manual-creation fallback when opening the sink fails
LOG_FILE_START_MARKER: Final[str] = "=== Log file start ==="

# 0 means unbounded
DEFAULT_MAX_QUEUE_SIZE: Final[int] = 0

# =============================================================================
# Configuration
# =============================================================================

CONFIG_SECTION: Final[str] = "logging"

KEY_LOG_FILE: Final[str] = "log_file"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE: Final[str] = "console"
KEY_COLORS: Final[str] = "colors"
KEY_FSYNC: Final[str] = "fsync"
KEY_MAX_QUEUE_SIZE: Final[str] = "max_queue_size"

ENV_LOG_CONFIG: Final[str] = "SPECTRAL_LOG_CONFIG"
ENV_LOG_FILE: Final[str] = "SPECTRAL_LOG_FILE"
ENV_LOG_DIR: Final[str] = "SPECTRAL_LOG_DIR"
ENV_LOG_LEVEL: Final[str] = "SPECTRAL_LOG_LEVEL"
ENV_DIAGNOSTIC_LEVEL: Final[str] = "SPECTRAL_DIAGNOSTIC_LEVEL"

# =============================================================================
# Diagnostics (operational side channel)
# =============================================================================

DIAGNOSTIC_LOGGER_NAME: Final[str] = "spectral_logger"
DEFAULT_DIAGNOSTIC_LEVEL: Final[str] = "WARNING"
DIAGNOSTIC_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
DIAGNOSTIC_DATE_FORMAT: Final[str] = "%H:%M:%S"

# =============================================================================
# Colors
# =============================================================================

ANSI_RESET: Final[str] = "\033[0m"

# Console styles for entry lines, keyed by LogLevel name
ENTRY_STYLES: Final[dict[str, str]] = {
    "DEBUG": "\033[2m",  # Dim
    "INFO": "",  # Normal
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
}

# Colors for diagnostic level names, keyed by logging level name
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": ANSI_RESET,
}
