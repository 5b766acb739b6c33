"""Pytest configuration and fixtures for spectral-logger tests."""

import logging

import pytest

from spectral_logger import SpectralLogger, clear_logger_state


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable propagation of diagnostic loggers during tests.

    The ``spectral_logger`` logger is created with propagate=False; turning
    it on lets pytest's caplog fixture see diagnostics.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("spectral_logger"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture(autouse=True)
def isolated_singleton():
    """Reset the process-wide logger around every test."""
    clear_logger_state()
    yield
    clear_logger_state()


@pytest.fixture
def log_file(tmp_path):
    """Return a log path inside a directory that does not exist yet."""
    return tmp_path / "logs" / "application.log"


@pytest.fixture
def make_logger(log_file):
    """Build SpectralLogger instances without console output.

    Every logger created through the factory is disposed at teardown.
    """
    created = []

    def _factory(**kwargs):
        kwargs.setdefault("console", False)
        path = kwargs.pop("log_file", log_file)
        instance = SpectralLogger(path, **kwargs)
        created.append(instance)
        return instance

    yield _factory

    for instance in created:
        instance.dispose()
