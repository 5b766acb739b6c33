"""Operational side channel for the logger itself.

Failures inside the pipeline (dropped entries, reopen attempts, queue
rejections) are reported through the standard library logging module
under the ``spectral_logger`` hierarchy, never through the sink they
describe.

Usage:
    >>> from spectral_logger.diagnostics import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("Dropped entry for %s", path)

Only the ``spectral_logger`` logger carries a handler; child loggers
propagate to it. Use %-style arguments, not f-strings.
"""

import logging
import os
import sys
import threading

from spectral_logger.constants import (
    DEFAULT_DIAGNOSTIC_LEVEL,
    DIAGNOSTIC_DATE_FORMAT,
    DIAGNOSTIC_FORMAT,
    DIAGNOSTIC_LOGGER_NAME,
    ENV_DIAGNOSTIC_LEVEL,
)
from spectral_logger.formatters import DiagnosticFormatter

_setup_lock = threading.Lock()


def _diagnostic_level() -> int:
    level_name = os.getenv(ENV_DIAGNOSTIC_LEVEL, DEFAULT_DIAGNOSTIC_LEVEL)
    level = logging.getLevelName(level_name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.WARNING


def setup_diagnostics() -> logging.Logger:
    """Attach the stderr handler to the diagnostic root logger once.

    Thread-safe; later calls return the already configured logger.

    Returns:
        The ``spectral_logger`` logger

    """
    root = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    with _setup_lock:
        if root.handlers:
            return root

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            DiagnosticFormatter(
                DIAGNOSTIC_FORMAT, datefmt=DIAGNOSTIC_DATE_FORMAT
            )
        )
        root.addHandler(handler)
        root.setLevel(_diagnostic_level())
        root.propagate = False
    return root


def get_logger(name: str = DIAGNOSTIC_LOGGER_NAME) -> logging.Logger:
    """Return a diagnostic logger, typically get_logger(__name__)."""
    setup_diagnostics()
    return logging.getLogger(name)
