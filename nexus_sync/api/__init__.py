"""
Nexus API client modules.

This package provides the client for interacting with the Nexus REST API:
asset listing, streamed downloads and uploads with HTTP basic authentication.
"""

from .nexus_client import NexusClient

# Import Nexus API models for convenience
from ..models.nexus_api import AssetPage, Checksum, RepositoryItem

__all__ = [
    "NexusClient",
    # API Models
    "AssetPage",
    "Checksum",
    "RepositoryItem",
]
