"""
Session utilities for Nexus operations.

This module provides utilities for creating and configuring the HTTP client
shared by every worker of a sync run.
"""

import importlib.util
import logging
from typing import Optional

import httpx
from httpx import HTTPTransport

from .._version import __version__
from .constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport (connect errors only)
MAX_RETRIES = 3

USER_AGENT = f"nexus-sync/{__version__}"


def create_session_with_retry(
    timeout: float = DEFAULT_TIMEOUT,
    max_connections: Optional[int] = None,
    verify: bool = True,
    logger: Optional[logging.Logger] = None,
) -> httpx.Client:
    """
    Create an httpx client with retry strategy and connection pooling.

    Every in-flight transfer holds two connections (download and upload), so
    the pool defaults to twice the default worker count.

    Args:
        timeout: Total timeout in seconds (default: 300.0)
        max_connections: Maximum number of connections in the pool
        verify: Whether to verify TLS certificates
        logger: Logger used for setup diagnostics

    Returns:
        Configured httpx.Client object with:
        - Connection retries on connect failures
        - HTTP/2 support when the h2 package is installed
        - Connection pooling safe for concurrent use across threads
        - Timeout configuration

    Example:
        >>> client = create_session_with_retry()
        >>> response = client.get("http://localhost:8081/service/rest/v1/status")
        >>> # Self-signed test instance
        >>> client = create_session_with_retry(verify=False)
    """
    if max_connections is None:
        max_connections = DEFAULT_MAX_WORKERS * 2

    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(20, max_connections // 5),
    )

    timeout_config = httpx.Timeout(timeout, connect=DEFAULT_CONNECT_TIMEOUT)

    use_http2 = importlib.util.find_spec("h2") is not None
    if not use_http2 and logger is not None:
        logger.debug("HTTP/2 support not available (h2 package not installed)")

    transport = HTTPTransport(
        limits=limits,
        retries=MAX_RETRIES,
        verify=verify,
        http2=use_http2,
    )

    return httpx.Client(
        transport=transport,
        timeout=timeout_config,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


__all__ = ["create_session_with_retry", "USER_AGENT"]
