"""Context and configuration models for nexus-sync operations."""

from typing import Optional

from pydantic import Field, field_validator

from .base import NexusSyncBaseModel
from ..utils.constants import DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT


class NexusEndpoint(NexusSyncBaseModel):
    """
    Connection details for one side of a sync.

    Attributes:
        url: Base URL of the Nexus server (e.g. ``http://localhost:8081``)
        user: User name for HTTP basic authentication
        password: Password for HTTP basic authentication
        repository: Name of the repository on that server
    """

    url: str
    user: str
    password: str = Field(repr=False)
    repository: str

    @field_validator("url", "repository")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Reject blank values and trim surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value must not be empty")
        return v

    def describe(self) -> str:
        """Human readable ``url#repository`` label used in log messages."""
        return f"{self.url}#{self.repository}"


class SyncContext(NexusSyncBaseModel):
    """
    Context information for a sync run.

    Attributes:
        source: Endpoint artifacts are copied from
        destination: Endpoint artifacts are copied to
        max_workers: Capacity of the worker pool shared by fetches and transfers
        timeout: Per-request HTTP timeout in seconds
        verify_ssl: Whether TLS certificates are verified
        dry_run: Compute and report the diff without transferring anything
        results_json: Optional path the run result is written to as JSON
        debug: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
    """

    source: NexusEndpoint
    destination: NexusEndpoint
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1, le=255)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    verify_ssl: bool = True
    dry_run: bool = False
    results_json: Optional[str] = None
    debug: int = 0


__all__ = ["NexusEndpoint", "SyncContext"]
