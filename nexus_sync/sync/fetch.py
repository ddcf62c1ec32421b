"""
Repository metadata retrieval.

This module exhausts the paginated asset listing of one endpoint and builds a
snapshot keyed by item path.
"""

import logging
from typing import Dict, Optional

from ..api.nexus_client import NexusClient
from ..models.nexus_api import RepositoryItem
from .cancel import CancelSignal

RepositorySnapshot = Dict[str, RepositoryItem]


class MetadataFetcher:
    """Builds the full listing snapshot of one repository endpoint."""

    def __init__(self, client: NexusClient, logger: logging.Logger) -> None:
        """
        Initialize the fetcher.

        Args:
            client: Client of the endpoint to list
            logger: Logger for progress messages
        """
        self.client = client
        self.logger = logger

    def fetch_all(self, cancel: Optional[CancelSignal] = None) -> RepositorySnapshot:
        """
        Fetch every item of the repository.

        Items are merged by path; when several pages report the same path the
        later page wins. Any error aborts the whole fetch and nothing partial
        is returned.

        Args:
            cancel: Optional signal observed before each page request

        Returns:
            Mapping of item path to RepositoryItem

        Raises:
            CancellationError: If the signal is cancelled during the fetch
            TransportError: On connection-level failures
            ResponseError: On a non-success status or an unparsable page
        """
        snapshot: RepositorySnapshot = {}
        pages = 0

        for page in self.client.iter_asset_pages(cancel):
            pages += 1
            for item in page.items:
                if item.path in snapshot:
                    self.logger.debug("Path %s listed again on page %d, keeping the later entry", item.path, pages)
                snapshot[item.path] = item

        self.logger.info(
            "Fetched %d item(s) from '%s' @ %s in %d page(s)",
            len(snapshot),
            self.client.repository,
            self.client.endpoint.url,
            pages,
        )
        return snapshot


__all__ = ["MetadataFetcher", "RepositorySnapshot"]
