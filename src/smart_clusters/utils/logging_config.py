"""
Logging helpers for Smart Clusters.

Library modules call ``get_logger(__name__)``; applications (such as the
command-line entry point) call ``setup_logging`` once at startup.
"""

import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "smart_clusters"

DEFAULT_FORMAT = "%(asctime)s | %(name)-40s | %(levelname)-8s | %(message)s"

# Library default: stay silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger to write to stderr.

    Calling this again replaces the previously installed stream handler.

    Args:
        level: Logging level name or number (e.g. "DEBUG", logging.INFO)
        fmt: Optional format string (defaults to DEFAULT_FORMAT)

    Returns:
        The configured package logger

    Raises:
        ValueError: If *level* is not a known level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger
