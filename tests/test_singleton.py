"""Tests for the process-wide logger accessors."""

import threading
from unittest.mock import patch

import pytest

from spectral_logger import (
    ConfigurationError,
    LoggerSettings,
    LogLevel,
    SinkWriter,
    SpectralLogger,
    clear_logger_state,
    configure,
    get_instance,
    set_instance,
)
from spectral_logger.logger import _shutdown_at_exit
from spectral_logger.state import get_state


@pytest.fixture
def settings(log_file):
    """Return settings pointing at a temporary log file."""
    return LoggerSettings(log_file=log_file, console=False)


def test_concurrent_first_access_builds_one_logger(settings):
    """Racing first callers share one instance and one sink open."""
    configure(settings)
    barrier = threading.Barrier(8)
    results = []
    original_open = SinkWriter.open

    def access():
        barrier.wait()
        results.append(get_instance())

    with patch.object(
        SinkWriter, "open", autospec=True, side_effect=original_open
    ) as mock_open:
        threads = [threading.Thread(target=access) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert len(results) == 8
    assert all(instance is results[0] for instance in results)
    assert mock_open.call_count == 1


def test_get_instance_uses_configured_settings(settings, log_file):
    """configure() overrides are applied to the singleton."""
    configure(settings, level="error")

    instance = get_instance()

    assert instance.log_file == log_file
    assert instance.level is LogLevel.ERROR


def test_get_instance_without_configure_loads_environment(
    monkeypatch, tmp_path
):
    """Without configure(), settings come from the environment."""
    monkeypatch.setenv("SPECTRAL_LOG_FILE", str(tmp_path / "env.log"))
    monkeypatch.setenv("SPECTRAL_LOG_LEVEL", "debug")

    with patch("spectral_logger.logger.ConsoleRenderer") as console_cls:
        instance = get_instance()

    assert instance.log_file == tmp_path / "env.log"
    assert instance.level is LogLevel.DEBUG
    console_cls.assert_called_once()


def test_configure_after_creation_is_rejected(settings):
    """Settings cannot change once the singleton exists."""
    configure(settings)
    get_instance()

    with pytest.raises(ConfigurationError):
        configure(settings)


def test_failed_construction_leaves_no_instance(tmp_path, settings):
    """A failed build propagates and a later call can succeed."""
    blocked = tmp_path / "blocked"
    blocked.mkdir()
    configure(LoggerSettings(log_file=blocked, console=False))

    with pytest.raises(Exception, match="Logger initialization failed"):
        get_instance()
    assert get_state().instance is None

    clear_logger_state()
    configure(settings)
    assert get_instance().is_active


def test_set_instance_injects_isolated_logger(log_file):
    """set_instance() replaces the accessor target for tests."""
    injected = SpectralLogger(log_file, console=False)
    try:
        assert set_instance(injected) is None
        assert get_instance() is injected
        assert set_instance(None) is injected
    finally:
        injected.dispose()


def test_clear_logger_state_disposes_instance(settings):
    """clear_logger_state() disposes and forgets the singleton."""
    configure(settings)
    first = get_instance()

    clear_logger_state()

    assert not first.is_active
    assert get_state().instance is None
    assert get_state().settings is None


def test_exit_hook_drains_singleton(settings, log_file):
    """The atexit hook writes pending entries before disposing."""
    configure(settings)
    instance = get_instance()
    for i in range(10):
        instance.info(f"exit {i}")

    _shutdown_at_exit()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert [line.split("] ", 1)[1] for line in lines] == [
        f"exit {i}" for i in range(10)
    ]
    assert get_state().instance is None
