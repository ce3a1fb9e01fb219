"""
Tests for logging helpers.
"""

import logging

import pytest

from smart_clusters.utils.logging_config import PACKAGE_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler and level changes made by setup_logging."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


def test_get_logger_is_named():
    """Module loggers live under the package logger."""
    logger = get_logger("smart_clusters.algorithms.kmedoids")
    assert logger.name == "smart_clusters.algorithms.kmedoids"
    assert logger.parent.name.startswith(PACKAGE_LOGGER_NAME)


def test_setup_logging_accepts_level_names():
    """Level names are case-insensitive."""
    logger = setup_logging("debug")
    assert logger.level == logging.DEBUG


def test_setup_logging_replaces_stream_handler():
    """Repeated setup keeps a single stream handler."""
    setup_logging("INFO")
    logger = setup_logging(logging.WARNING)
    streams = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1
    assert logger.level == logging.WARNING


def test_setup_logging_rejects_unknown_level():
    """Unknown level names raise ValueError."""
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("CHATTY")
