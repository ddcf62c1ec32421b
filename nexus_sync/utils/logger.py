"""
Logging configuration and utilities for the nexus-sync package.

This module provides logging setup and a wrapping formatter. Components never
look loggers up on their own: the CLI creates the package logger once with
``get_logger`` and hands it (or a child of it) to each component it builds.
"""

import logging
import textwrap
from typing import Optional

# ============================================================================
# Logging Configuration Constants
# ============================================================================

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

# Name of the package logger handed to components
PACKAGE_LOGGER_NAME = "nexus_sync"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# Loggers of the HTTP stack, only shown at -ddd
HTTP_LOGGER_NAMES = ("httpx", "httpcore")

# -d count at which HTTP request logs are shown
HTTP_LOG_VERBOSITY = 3

# ============================================================================
# Custom Formatters
# ============================================================================


class WrappingFormatter(logging.Formatter):
    """
    Formatter that folds long records onto several lines.

    Records that already fit within ``width`` are returned untouched.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted
        return textwrap.fill(formatted, width=self.width)


# ============================================================================
# Logging Setup Functions
# ============================================================================


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-d`` count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Configure the root logger for a CLI run.

    Args:
        verbosity: Number of ``-d`` flags given on the command line
        use_wrapping: Replace the root handlers with one using WrappingFormatter

    Verbosity Levels:
        0 (default): WARNING - Only the run summary, warnings and errors
        1 (-d):      INFO - Progress of fetches and transfers
        2 (-dd):     DEBUG - Per-page and per-attempt details
        3+ (-ddd):   DEBUG - Same as -dd plus httpx/httpcore request logs
    """
    level = verbosity_to_level(verbosity)

    if use_wrapping:
        handler = logging.StreamHandler()
        handler.setFormatter(WrappingFormatter(fmt=LOG_FORMAT))
        root_logger = logging.getLogger()
        root_logger.handlers[:] = [handler]
        root_logger.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    # httpx logs every request at INFO, which would drown the transfer progress
    http_level = logging.DEBUG if verbosity >= HTTP_LOG_VERBOSITY else logging.WARNING
    for name in HTTP_LOGGER_NAMES:
        logging.getLogger(name).setLevel(http_level)


# ============================================================================
# Convenience Functions
# ============================================================================


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Name for the logger (defaults to the package logger)

    Returns:
        Logger instance

    Example:
        >>> logger = get_logger()
        >>> coordinator_logger = logger.getChild("coordinator")
    """
    return logging.getLogger(name)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
    "verbosity_to_level",
    "get_logger",
    "PACKAGE_LOGGER_NAME",
]
