"""
Nexus API client for one repository endpoint.

This module provides the NexusClient class, which wraps a shared httpx client
with the endpoint's basic-auth credentials and knows how to:

    - list repository assets page by page (``/service/rest/v1/assets``)
    - stream an asset's content from its download URL
    - upload content to ``/repository/<repository>/<path>``

All httpx failures are translated into the nexus-sync exception hierarchy
(TransportError, ResponseError) so callers never handle raw httpx errors.
"""

# Standard library imports
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Generator, Iterable, Iterator, Optional

# Third-party imports
import httpx
from pydantic import ValidationError

# Local imports
from ..exceptions import ResponseError
from ..models.context import NexusEndpoint
from ..models.nexus_api import AssetPage
from ..utils.constants import CONTINUATION_TOKEN_PARAM, DEFAULT_TIMEOUT, REPOSITORY_PARAM
from ..utils.error_handling import parse_json_response, translate_http_error
from ..utils.session import create_session_with_retry
from ..utils.url import build_assets_url, build_upload_url

if TYPE_CHECKING:  # pragma: no cover
    from ..sync.cancel import CancelSignal

# Maximum number of response body characters kept in debug logs
ERROR_BODY_PREVIEW = 500


class NexusClient:
    """
    A client for one Nexus repository endpoint.

    The underlying httpx.Client may be shared between several NexusClient
    instances (it is safe for concurrent use); a client only closes a session
    it created itself.
    """

    def __init__(
        self,
        endpoint: NexusEndpoint,
        logger: logging.Logger,
        session: Optional[httpx.Client] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool = True,
    ) -> None:
        """Initialize the Nexus client.

        Args:
            endpoint: Server, credentials and repository of this side
            logger: Logger for request diagnostics
            session: Optional shared httpx client; one is created when omitted
            timeout: Request timeout used when creating a session
            verify: TLS verification used when creating a session
        """
        self.endpoint = endpoint
        self.logger = logger
        self._owns_session = session is None
        self.session = (
            session if session is not None else create_session_with_retry(timeout=timeout, verify=verify, logger=logger)
        )
        self.auth = httpx.BasicAuth(endpoint.user, endpoint.password)

    # ========================================================================
    # URL helpers
    # ========================================================================

    @property
    def repository(self) -> str:
        """Repository name of this endpoint."""
        return self.endpoint.repository

    @property
    def assets_url(self) -> str:
        """Asset listing endpoint of this server."""
        return build_assets_url(self.endpoint.url)

    def upload_url(self, relative_path: str) -> str:
        """Upload locator of ``relative_path`` in this endpoint's repository."""
        return build_upload_url(self.endpoint.url, self.endpoint.repository, relative_path)

    # ========================================================================
    # Response checking
    # ========================================================================

    def _check_response(self, response: httpx.Response, operation: str) -> None:
        """Check if a response is successful, raise ResponseError if not."""
        if response.is_success:
            return

        body = response.read()[:ERROR_BODY_PREVIEW]
        if response.status_code >= 500:
            self.logger.error("Server error during %s: %s - %r", operation, response.status_code, body)
        else:
            self.logger.debug("Client error during %s: %s - %r", operation, response.status_code, body)

        raise ResponseError(
            f"Failed to {operation}: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )

    # ========================================================================
    # Listing
    # ========================================================================

    def list_assets(
        self, continuation_token: Optional[str] = None, cancel: Optional["CancelSignal"] = None
    ) -> AssetPage:
        """
        Fetch one page of the repository's asset listing.

        Args:
            continuation_token: Token returned by the previous page, None for the first page
            cancel: Optional signal checked before the request is sent

        Returns:
            AssetPage with the page's items and the next continuation token

        Raises:
            CancellationError: If the signal was cancelled before the request
            TransportError: On connection-level failures
            ResponseError: On a non-success status or an unparsable body
        """
        operation = f"list assets of '{self.repository}' at {self.endpoint.url}"
        if cancel is not None:
            cancel.raise_if_cancelled(operation)

        params = {REPOSITORY_PARAM: self.repository}
        if continuation_token:
            params[CONTINUATION_TOKEN_PARAM] = continuation_token

        try:
            response = self.session.get(self.assets_url, params=params, auth=self.auth)
        except httpx.HTTPError as e:
            raise translate_http_error(e, operation) from e

        self._check_response(response, operation)
        data: Any = parse_json_response(response, operation, self.logger)

        try:
            return AssetPage.model_validate(data)
        except ValidationError as e:
            raise ResponseError(
                f"Unexpected response during {operation}: {e.error_count()} validation error(s)",
                status_code=response.status_code,
            ) from e

    def iter_asset_pages(self, cancel: Optional["CancelSignal"] = None) -> Generator[AssetPage, None, None]:
        """
        Iterate over all pages of the repository's asset listing.

        The generator is lazy and can only be consumed once: each ``next()``
        performs one request, and iteration stops after the page whose
        continuation token is empty.

        Args:
            cancel: Optional signal checked before each request

        Yields:
            One AssetPage per request

        Raises:
            ResponseError: If the server hands out the same continuation token twice in a row
        """
        token: Optional[str] = None
        page_number = 0
        while True:
            page = self.list_assets(token, cancel)
            page_number += 1
            self.logger.debug(
                "Fetched page %d of '%s' (%d items)", page_number, self.repository, len(page.items)
            )
            yield page

            if not page.has_next:
                return
            if page.continuation_token == token:
                raise ResponseError(
                    f"Server repeated continuation token '{token}' while listing '{self.repository}'"
                )
            token = page.continuation_token

    # ========================================================================
    # Content transfer
    # ========================================================================

    @contextmanager
    def stream_download(self, url: str) -> Iterator[httpx.Response]:
        """
        Open a streamed download of an asset.

        Args:
            url: Download URL of the asset

        Yields:
            The open response; its body is read while the context is active

        Raises:
            TransportError: On connection-level failures, including while reading the body
            ResponseError: On a non-success status
        """
        operation = f"download {url}"
        try:
            with self.session.stream("GET", url, auth=self.auth) as response:
                self._check_response(response, operation)
                yield response
        except httpx.HTTPError as e:
            raise translate_http_error(e, operation) from e

    def upload(self, url: str, content: Iterable[bytes]) -> httpx.Response:
        """
        Upload content to a repository path.

        The body is sent with chunked transfer encoding as ``content`` yields.

        Args:
            url: Upload URL (see ``upload_url``)
            content: Iterable producing the raw artifact bytes

        Returns:
            The successful response

        Raises:
            TransportError: On connection-level failures
            ResponseError: On a non-success status
        """
        operation = f"upload {url}"
        try:
            response = self.session.put(
                url,
                content=content,
                auth=self.auth,
                headers={"Content-Type": "application/octet-stream"},
            )
        except httpx.HTTPError as e:
            raise translate_http_error(e, operation) from e

        self._check_response(response, operation)
        return response

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()
            self.logger.debug("NexusClient session closed for %s", self.endpoint.describe())

    def __enter__(self) -> "NexusClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        """Context manager exit - ensures session is closed."""
        self.close()


__all__ = ["NexusClient"]
