"""
Endpoint validation utilities.

This module validates sync endpoints before any network call is made.
"""

import httpx

from ..exceptions import ConfigurationError
from ..models.context import NexusEndpoint
from .constants import SUPPORTED_URL_SCHEMES
from .url import normalize_base_url


def validate_endpoint_url(url: str) -> None:
    """
    Validate that a URL can address a Nexus server.

    Args:
        url: Base URL to validate

    Raises:
        ConfigurationError: If the URL is malformed, has no host or uses an unsupported scheme
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid URL '{url}': {e}") from e

    if parsed.scheme not in SUPPORTED_URL_SCHEMES:
        raise ConfigurationError(
            f"Invalid URL '{url}': scheme must be one of {', '.join(SUPPORTED_URL_SCHEMES)}"
        )
    if not parsed.host:
        raise ConfigurationError(f"Invalid URL '{url}': missing host")


def validate_sync_endpoints(source: NexusEndpoint, destination: NexusEndpoint) -> None:
    """
    Validate a source/destination pair.

    Syncing a repository onto itself is a guaranteed no-op and is rejected.
    URLs and repository names are compared case-insensitively.

    Args:
        source: Endpoint artifacts are copied from
        destination: Endpoint artifacts are copied to

    Raises:
        ConfigurationError: If either URL is invalid or both endpoints are the same repository

    Example:
        >>> a = NexusEndpoint(url="http://localhost:8081", user="u", password="p", repository="r")
        >>> validate_sync_endpoints(a, a)
        Traceback (most recent call last):
        ...
        nexus_sync.exceptions.ConfigurationError: The same 'from' and 'to' (http://localhost:8081#r), no-op
    """
    validate_endpoint_url(source.url)
    validate_endpoint_url(destination.url)

    same_url = normalize_base_url(source.url) == normalize_base_url(destination.url)
    same_repository = source.repository.lower() == destination.repository.lower()
    if same_url and same_repository:
        raise ConfigurationError(f"The same 'from' and 'to' ({source.describe()}), no-op")


__all__ = ["validate_endpoint_url", "validate_sync_endpoints"]
