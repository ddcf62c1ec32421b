"""
Pydantic models for Nexus REST API responses.

This module provides type-safe models for the asset listing endpoint
(``/service/rest/v1/assets``). Unknown fields returned by the server are
accepted and ignored so that newer Nexus versions keep parsing.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Base Models
# ============================================================================


class NexusBaseModel(BaseModel):
    """Base model for all Nexus API responses."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# ============================================================================
# Asset Models
# ============================================================================


class Checksum(NexusBaseModel):
    """Content hashes reported for an asset."""

    sha1: Optional[str] = None
    md5: Optional[str] = None
    sha256: Optional[str] = None
    sha512: Optional[str] = None


class RepositoryItem(NexusBaseModel):
    """
    One asset entry of a repository listing.

    Items are immutable once parsed; the destination locator for a transfer is
    kept separately on ``TransferTask``.

    Attributes:
        path: Path relative to the repository root, unique within a listing
        download_url: Absolute URL the asset content can be downloaded from
        id: Server-side asset identifier
        repository: Name of the repository the asset belongs to
        format: Repository format tag (maven2, npm, raw, ...)
        checksum: Content hashes of the asset
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    path: str
    download_url: str = Field(alias="downloadUrl")
    id: str = ""
    repository: str = ""
    format: str = ""
    checksum: Checksum = Field(default_factory=Checksum)

    @field_validator("path")
    @classmethod
    def strip_leading_slash(cls, v: str) -> str:
        """Normalize paths so they can be joined under a repository name."""
        v = v.lstrip("/")
        if not v:
            raise ValueError("asset path must not be empty")
        return v

    @property
    def strong_hash(self) -> Optional[str]:
        """The authoritative content hash used for equality checks (SHA-1)."""
        return self.checksum.sha1


class AssetPage(NexusBaseModel):
    """One page of the paginated asset listing."""

    items: List[RepositoryItem] = Field(default_factory=list)
    continuation_token: Optional[str] = Field(default=None, alias="continuationToken")

    @property
    def has_next(self) -> bool:
        """Check whether the server reported another page."""
        return bool(self.continuation_token)


__all__ = [
    "NexusBaseModel",
    "Checksum",
    "RepositoryItem",
    "AssetPage",
]
