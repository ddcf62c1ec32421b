"""
Error handling utilities for standardized error logging and translation.

This module maps httpx failures onto the nexus-sync exception hierarchy and
provides reusable logging helpers for the CLI and the run coordinator.
"""

import json
import logging
import traceback
from typing import Any, Optional

import httpx

from ..exceptions import NexusSyncError, ResponseError, TransportError


def translate_http_error(error: httpx.HTTPError, operation: str) -> NexusSyncError:
    """
    Translate an httpx error into a nexus-sync error.

    Args:
        error: The httpx error raised by the transport or by raise_for_status
        operation: Description of the operation that failed

    Returns:
        TransportError for connection-level failures, ResponseError otherwise
    """
    if isinstance(error, httpx.HTTPStatusError):
        return ResponseError(
            f"Failed to {operation}: {error.response.status_code} {error.response.reason_phrase}",
            status_code=error.response.status_code,
        )
    if isinstance(error, httpx.TransportError):
        return TransportError(f"Failed to {operation}: {type(error).__name__}: {error}")
    return ResponseError(f"Failed to {operation}: {error}")


def handle_http_error(
    error: NexusSyncError, operation: str, logger: logging.Logger, *, log_traceback: bool = True
) -> None:
    """
    Log a request failure with a hint matching its status code.

    Args:
        error: The error to handle
        operation: Description of the operation that failed
        logger: Logger to report on
        log_traceback: Whether to log the full traceback at DEBUG level
    """
    status_code = getattr(error, "status_code", None)

    if status_code == 401:
        logger.error(
            "Authentication failed during %s: Invalid credentials. Please check the configured user and password.",
            operation,
        )
    elif status_code == 403:
        logger.error(
            "Authentication failed during %s: The user doesn't have permission to access this repository.",
            operation,
        )
    elif status_code == 404:
        logger.error("Resource not found during %s (does the repository exist?): %s", operation, error)
    elif status_code is not None and status_code >= 500:
        logger.error("Server error during %s: %s", operation, error)
    elif isinstance(error, TransportError):
        logger.error("Connection error during %s: %s", operation, error)
    else:
        logger.error("HTTP error during %s: %s", operation, error)

    if log_traceback:
        logger.debug("Traceback: %s", traceback.format_exc())


def handle_generic_error(error: Exception, operation: str, logger: logging.Logger, *, log_traceback: bool = True) -> None:
    """
    Handle generic errors with standardized logging.

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        logger: Logger to report on
        log_traceback: Whether to log the full traceback
    """
    logger.error("Unexpected error during %s: %s", operation, error)

    if log_traceback:
        logger.error("Traceback: %s", traceback.format_exc())


def parse_json_response(response: httpx.Response, operation: str, logger: Optional[logging.Logger] = None) -> Any:
    """
    Parse a response body as JSON.

    Args:
        response: Response whose body should be parsed
        operation: Description of operation for error messages
        logger: Optional logger used to preview unparsable content

    Returns:
        Parsed JSON data

    Raises:
        ResponseError: If the body is not valid JSON
    """
    try:
        return response.json()
    except (ValueError, json.JSONDecodeError) as e:
        if logger is not None:
            content = response.text
            logger.debug("Content preview: %s", content[:500])
        raise ResponseError(f"Invalid JSON during {operation}: {e}", status_code=response.status_code) from e


__all__ = [
    "translate_http_error",
    "handle_http_error",
    "handle_generic_error",
    "parse_json_response",
]
