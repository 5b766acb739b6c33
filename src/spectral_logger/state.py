"""Process-wide logger state.

Holds the singleton SpectralLogger and the settings used to build it.
All mutation goes through the lock; reads of ``instance`` outside the lock
are the fast path of double-checked initialization.
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spectral_logger.config import LoggerSettings
    from spectral_logger.logger import SpectralLogger


class _LoggerState:
    """Container for singleton state (avoids module-level mutable globals).

    Attributes:
        lock: Guards construction and replacement of the instance
        instance: The process-wide logger, None until first access
        settings: Settings for the first construction, None for defaults

    """

    def __init__(self) -> None:
        """Initialize empty state."""
        self.lock = threading.Lock()
        self.instance: SpectralLogger | None = None
        self.settings: LoggerSettings | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Return the process-wide state container."""
    return _state
