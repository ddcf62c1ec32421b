"""
Pydantic models for nexus-sync.

This package contains all Pydantic models used in the application:
- nexus_api: Models for Nexus REST API responses
- base, context, results: Domain models
"""

# Nexus API Response Models
from .nexus_api import (
    NexusBaseModel,
    Checksum,
    RepositoryItem,
    AssetPage,
)

# Domain Models
from .base import NexusSyncBaseModel
from .context import NexusEndpoint, SyncContext
from .results import SyncResult, SyncStatus, TransferOutcome, TransferOutcomes, TransferTask

__all__ = [
    # Nexus API Models
    "NexusBaseModel",
    "Checksum",
    "RepositoryItem",
    "AssetPage",
    # Domain Models
    "NexusSyncBaseModel",
    "NexusEndpoint",
    "SyncContext",
    "SyncResult",
    "SyncStatus",
    "TransferOutcome",
    "TransferOutcomes",
    "TransferTask",
]
