"""
Test fixtures and mock data for nexus-sync tests.

This module provides common fixtures for testing the nexus-sync package:
endpoints, clients sharing one real httpx session, and factories that register
respx routes for the Nexus asset listing.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
import respx

from nexus_sync.api import NexusClient
from nexus_sync.models import NexusEndpoint, RepositoryItem, SyncContext
from nexus_sync.utils.constants import ASSETS_API_PATH
from nexus_sync.utils.session import create_session_with_retry

SOURCE_URL = "http://source.example.com:8081"
DESTINATION_URL = "http://dest.example.com:8081"
SOURCE_REPO = "maven-releases"
DESTINATION_REPO = "maven-mirror"


@pytest.fixture
def httpx_mock():
    """Provide respx router for HTTP mocking."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def logger():
    """Logger handed to components under test."""
    return logging.getLogger("nexus_sync.tests")


@pytest.fixture
def source_endpoint():
    """Source endpoint with read credentials."""
    return NexusEndpoint(url=SOURCE_URL, user="reader", password="read-secret", repository=SOURCE_REPO)


@pytest.fixture
def destination_endpoint():
    """Destination endpoint with write credentials."""
    return NexusEndpoint(url=DESTINATION_URL, user="writer", password="write-secret", repository=DESTINATION_REPO)


@pytest.fixture
def sync_context(source_endpoint, destination_endpoint):
    """Sync context with a small worker pool."""
    return SyncContext(source=source_endpoint, destination=destination_endpoint, max_workers=4)


@pytest.fixture
def session():
    """Real httpx client shared by both sides, as in the CLI."""
    client = create_session_with_retry(timeout=5.0)
    yield client
    client.close()


@pytest.fixture
def source_client(source_endpoint, logger, session):
    """NexusClient for the source endpoint."""
    return NexusClient(source_endpoint, logger.getChild("source"), session)


@pytest.fixture
def destination_client(destination_endpoint, logger, session):
    """NexusClient for the destination endpoint."""
    return NexusClient(destination_endpoint, logger.getChild("destination"), session)


def _asset(base_url: str, repository: str, path: str, sha1: Optional[str]) -> Dict[str, Any]:
    return {
        "downloadUrl": f"{base_url}/repository/{repository}/{path}",
        "path": path,
        "id": f"{repository}:{path}",
        "repository": repository,
        "format": "maven2",
        "checksum": {"sha1": sha1, "md5": "d41d8cd98f00b204e9800998ecf8427e"},
    }


@pytest.fixture
def source_asset() -> Callable[[str, Optional[str]], Dict[str, Any]]:
    """Factory for asset listing entries of the source repository."""
    return lambda path, sha1="0" * 40: _asset(SOURCE_URL, SOURCE_REPO, path, sha1)


@pytest.fixture
def destination_asset() -> Callable[[str, Optional[str]], Dict[str, Any]]:
    """Factory for asset listing entries of the destination repository."""
    return lambda path, sha1="0" * 40: _asset(DESTINATION_URL, DESTINATION_REPO, path, sha1)


@pytest.fixture
def make_item() -> Callable[..., RepositoryItem]:
    """Factory for parsed source RepositoryItem models."""

    def _make(path: str, sha1: Optional[str] = "0" * 40) -> RepositoryItem:
        return RepositoryItem.model_validate(_asset(SOURCE_URL, SOURCE_REPO, path, sha1))

    return _make


@pytest.fixture
def mock_listing(httpx_mock):
    """
    Factory registering a paginated asset listing for one server.

    Each element of ``pages`` is the list of items of one page. Pages are
    chained with tokens ``token-1``, ``token-2``...; the first request carries
    no token and the last page returns a null token.

    Example:
        def test_something(mock_listing, source_asset):
            route = mock_listing(SOURCE_URL, [[source_asset("a.jar")], []])
    """

    def _mock(base_url: str, pages: List[List[Dict[str, Any]]]) -> respx.Route:
        responses = {}
        for index, items in enumerate(pages):
            token = f"token-{index}" if index else None
            next_token = f"token-{index + 1}" if index + 1 < len(pages) else None
            responses[token] = {"items": items, "continuationToken": next_token}

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=responses[request.url.params.get("continuationToken")])

        url = httpx.URL(base_url)
        return httpx_mock.route(method="GET", host=url.host, port=url.port, path=ASSETS_API_PATH).mock(
            side_effect=handler
        )

    return _mock
