"""Settings loading for the process-wide logger.

Settings come from three layers, later ones winning:

1. Built-in defaults (``./logs/application.log`` at level INFO)
2. The ``[logging]`` section of an INI file, given explicitly or through
   ``SPECTRAL_LOG_CONFIG``
3. Environment variables ``SPECTRAL_LOG_FILE``, ``SPECTRAL_LOG_DIR`` and
   ``SPECTRAL_LOG_LEVEL``

Example settings file::

    [logging]
    log_file = ~/.local/state/myapp/app.log
    log_level = DEBUG
    console = true
    colors = auto
    fsync = false
    max_queue_size = 0

Resolving where logs should live (project roots, timestamped names) is
left to the caller, which can pass the result as ``log_file``.
"""

import configparser
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from spectral_logger.constants import (
    CONFIG_SECTION,
    DEFAULT_LOG_DIR_NAME,
    DEFAULT_LOG_FILE_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_QUEUE_SIZE,
    ENV_LOG_CONFIG,
    ENV_LOG_DIR,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    KEY_COLORS,
    KEY_CONSOLE,
    KEY_FSYNC,
    KEY_LOG_FILE,
    KEY_LOG_LEVEL,
    KEY_MAX_QUEUE_SIZE,
)
from spectral_logger.exceptions import ConfigurationError
from spectral_logger.types import LogLevel


def default_log_file() -> Path:
    """Return the default log path under the current directory."""
    return Path.cwd() / DEFAULT_LOG_DIR_NAME / DEFAULT_LOG_FILE_NAME


@dataclass(frozen=True)
class LoggerSettings:
    """Parameters needed to construct a SpectralLogger.

    Attributes:
        log_file: Sink file path
        level: Initial threshold
        console: Echo entries to standard output
        use_colors: Force console colors on/off, None for TTY detection
        fsync: Force every line to disk
        max_queue_size: Channel capacity, 0 for unbounded

    """

    log_file: Path
    level: LogLevel = LogLevel[DEFAULT_LOG_LEVEL]
    console: bool = True
    use_colors: bool | None = None
    fsync: bool = False
    max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE

    def with_overrides(self, **overrides: Any) -> "LoggerSettings":
        """Return a copy with the given fields replaced and normalized."""
        if "log_file" in overrides:
            overrides["log_file"] = Path(overrides["log_file"]).expanduser()
        if "level" in overrides:
            overrides["level"] = LogLevel.parse(overrides["level"])
        try:
            return replace(self, **overrides)
        except TypeError as e:
            raise ConfigurationError(str(e)) from e


def _parse_bool(value: str, key: str) -> bool:
    normalized = value.strip().lower()
    if normalized in configparser.ConfigParser.BOOLEAN_STATES:
        return configparser.ConfigParser.BOOLEAN_STATES[normalized]
    msg = f"expected a boolean, got {value!r}"
    raise ConfigurationError(msg, key)


def _read_config_file(
    config_file: Path, settings: LoggerSettings
) -> LoggerSettings:
    parser = configparser.ConfigParser()
    try:
        with config_file.open(encoding="utf-8") as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        msg = f"cannot read settings file: {e}"
        raise ConfigurationError(msg, str(config_file)) from e

    if not parser.has_section(CONFIG_SECTION):
        return settings
    section = parser[CONFIG_SECTION]

    overrides: dict[str, Any] = {}
    if KEY_LOG_FILE in section:
        overrides["log_file"] = section[KEY_LOG_FILE]
    if KEY_LOG_LEVEL in section:
        overrides["level"] = section[KEY_LOG_LEVEL]
    if KEY_CONSOLE in section:
        overrides["console"] = _parse_bool(section[KEY_CONSOLE], KEY_CONSOLE)
    if KEY_COLORS in section:
        colors = section[KEY_COLORS].strip().lower()
        overrides["use_colors"] = (
            None if colors == "auto" else _parse_bool(colors, KEY_COLORS)
        )
    if KEY_FSYNC in section:
        overrides["fsync"] = _parse_bool(section[KEY_FSYNC], KEY_FSYNC)
    if KEY_MAX_QUEUE_SIZE in section:
        raw = section[KEY_MAX_QUEUE_SIZE]
        try:
            overrides["max_queue_size"] = int(raw)
        except ValueError:
            msg = f"expected an integer, got {raw!r}"
            raise ConfigurationError(msg, KEY_MAX_QUEUE_SIZE) from None

    return settings.with_overrides(**overrides)


def load_logger_settings(config_file: Path | str | None = None) -> LoggerSettings:
    """Load settings from defaults, an optional INI file and the environment.

    Args:
        config_file: INI file to read; falls back to SPECTRAL_LOG_CONFIG

    Returns:
        Resolved settings

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid

    """
    settings = LoggerSettings(log_file=default_log_file())

    config_path = config_file or os.getenv(ENV_LOG_CONFIG)
    if config_path:
        settings = _read_config_file(
            Path(config_path).expanduser(), settings
        )

    env_overrides: dict[str, Any] = {}
    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        env_overrides["log_file"] = (
            Path(env_log_dir).expanduser() / DEFAULT_LOG_FILE_NAME
        )
    env_log_file = os.getenv(ENV_LOG_FILE)
    if env_log_file:
        env_overrides["log_file"] = env_log_file
    env_level = os.getenv(ENV_LOG_LEVEL)
    if env_level:
        env_overrides["level"] = env_level

    if env_overrides:
        settings = settings.with_overrides(**env_overrides)
    return settings
