"""
URL utilities for Nexus operations.

This module builds the listing and upload URLs of a Nexus endpoint. Paths are
appended to the base URL's own path, so servers running under a context path
(``https://host/nexus``) are addressed correctly.
"""

from urllib.parse import quote

import httpx

from .constants import ASSETS_API_PATH, REPOSITORY_CONTENT_PATH


def join_url(base_url: str, path: str) -> str:
    """
    Append an absolute path to the path of a base URL.

    Args:
        base_url: Base URL of a Nexus server
        path: Path starting with ``/``, already percent-encoded

    Returns:
        The joined URL as a string

    Example:
        >>> join_url("https://repo.example.com/nexus/", "/service/rest/v1/assets")
        'https://repo.example.com/nexus/service/rest/v1/assets'
    """
    url = httpx.URL(base_url)
    return str(url.copy_with(path=url.path.rstrip("/") + path))


def build_assets_url(base_url: str) -> str:
    """Get the asset listing endpoint of a Nexus server."""
    return join_url(base_url, ASSETS_API_PATH)


def build_upload_url(base_url: str, repository: str, relative_path: str) -> str:
    """
    Get the upload locator of an item in a repository.

    Args:
        base_url: Base URL of the destination Nexus server
        repository: Destination repository name
        relative_path: Item path relative to the repository root

    Returns:
        ``<base>/repository/<repository>/<relative_path>`` with the path quoted

    Example:
        >>> build_upload_url("http://localhost:8081", "maven-releases", "org/acme/app-1.0.jar")
        'http://localhost:8081/repository/maven-releases/org/acme/app-1.0.jar'
    """
    path = f"{REPOSITORY_CONTENT_PATH}/{quote(repository, safe='')}/{quote(relative_path.lstrip('/'), safe='/')}"
    return join_url(base_url, path)


def normalize_base_url(base_url: str) -> str:
    """Normalize a base URL for equality checks (case and trailing slash)."""
    return str(httpx.URL(base_url)).rstrip("/").lower()


__all__ = ["join_url", "build_assets_url", "build_upload_url", "normalize_base_url"]
