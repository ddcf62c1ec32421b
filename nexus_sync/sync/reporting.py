"""
Reporting utilities for sync runs.

The summary is logged at WARNING level so it is visible without ``-d``; every
path that could not be transferred is logged at ERROR level with its last error.
"""

import json
import logging
from pathlib import Path
from typing import Union

from ..models.results import SyncResult, SyncStatus
from ..utils.logging_utils import format_count_with_unit, log_list_items, log_summary_separator


def _log_run_summary(result: SyncResult, logger: logging.Logger) -> None:
    """Log the one-line run summary at WARNING level so it's always visible."""
    if result.status == SyncStatus.FAILED:
        logger.warning("Sync failed: %s", result.error)
        return

    if result.status == SyncStatus.CANCELLED:
        logger.warning(
            "Sync cancelled: %s transferred, %s not transferred (%s)",
            format_count_with_unit(result.transferred_count, "item"),
            format_count_with_unit(result.failed_count, "item"),
            result.error,
        )
        return

    if not result.diff_paths:
        logger.warning(
            "Sync complete: destination already up to date (%s compared)",
            format_count_with_unit(result.source_count, "item"),
        )
        return

    if result.dry_run:
        logger.warning(
            "Dry run: %s would be transferred",
            format_count_with_unit(len(result.diff_paths), "item"),
        )
        return

    if result.has_failures:
        logger.warning(
            "Sync complete: %d/%d transferred (%d failed)",
            result.transferred_count,
            len(result.diff_paths),
            result.failed_count,
        )
    else:
        logger.warning("Sync complete: %s transferred", format_count_with_unit(result.transferred_count, "item"))


def _log_failures(result: SyncResult, logger: logging.Logger) -> None:
    """Log every failed path with the last error observed for it."""
    for path, outcome in sorted(result.failures.items()):
        logger.error(
            "Failed to transfer %s after %s: %s",
            path,
            format_count_with_unit(outcome.attempts, "attempt"),
            outcome.error,
        )


def log_sync_report(result: SyncResult, logger: logging.Logger) -> None:
    """
    Log the end-of-run report.

    Args:
        result: Result of the run
        logger: Logger to report on
    """
    log_summary_separator(logger, "SYNC SUMMARY")
    logger.info("Source items: %d", result.source_count)
    logger.info("Destination items: %d", result.destination_count)
    logger.info("New or changed at source: %d", len(result.diff_paths))

    if result.dry_run and result.diff_paths:
        logger.info("Items that would be transferred:")
        log_list_items(logger, sorted(result.diff_paths))

    _log_run_summary(result, logger)
    _log_failures(result, logger)
    log_summary_separator(logger)


def write_results_json(result: SyncResult, path: Union[str, Path], logger: logging.Logger) -> Path:
    """
    Write the run result to a JSON file.

    Args:
        result: Result of the run
        path: Destination file, parent directories are created
        logger: Logger to report on

    Returns:
        The path written to
    """
    output = Path(path).expanduser()
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(result.to_json_dict(), f, indent=2)
    logger.info("Results written to %s", output)
    return output


__all__ = ["log_sync_report", "write_results_json"]
