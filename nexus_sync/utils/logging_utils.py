"""
Logging utilities for consistent run reporting.

This module provides standardized logging functions used by the end-of-run
report. Every function takes the logger to write to explicitly.
"""

import logging
from typing import Iterable, Optional

from .constants import SEPARATOR_WIDTH


def format_count_with_unit(count: int, unit: str, *, singular: Optional[str] = None) -> str:
    """
    Format a count with proper pluralization.

    Args:
        count: Number to format
        unit: Unit name (will be pluralized if count != 1)
        singular: Optional explicit singular form (defaults to unit)

    Returns:
        Formatted string like "5 artifacts" or "1 artifact"

    Examples:
        >>> format_count_with_unit(1, "artifact")
        '1 artifact'
        >>> format_count_with_unit(5, "artifact")
        '5 artifacts'
        >>> format_count_with_unit(1, "entries", singular="entry")
        '1 entry'
    """
    if count == 1:
        return f"{count} {singular or unit}"

    plural = unit if unit.endswith("s") else f"{unit}s"
    return f"{count} {plural}"


def log_summary_separator(
    logger: logging.Logger, title: Optional[str] = None, *, width: int = SEPARATOR_WIDTH, level: int = logging.INFO
) -> None:
    """
    Log a visual separator line with optional title.

    Args:
        logger: Logger to write to
        title: Optional title to display in separator
        width: Width of separator line
        level: Logging level to use
    """
    logger.log(level, "=" * width)
    if title:
        logger.log(level, title)
        logger.log(level, "=" * width)


def log_list_items(
    logger: logging.Logger, items: Iterable[str], prefix: str = "  - ", level: int = logging.INFO
) -> None:
    """
    Log a list of items with consistent formatting.

    Args:
        logger: Logger to write to
        items: Items to log
        prefix: Prefix for each item
        level: Logging level to use
    """
    for item in items:
        logger.log(level, "%s%s", prefix, item)


__all__ = [
    "format_count_with_unit",
    "log_summary_separator",
    "log_list_items",
]
