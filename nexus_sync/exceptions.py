"""
Exception hierarchy for nexus-sync.

Fetch-phase errors (TransportError, ResponseError, CancellationError) are fatal
to a run. TransferError is raised for a single failed transfer attempt and is
retried by the run coordinator before being recorded as a per-item failure.
"""

from typing import Optional


class NexusSyncError(Exception):
    """Base class for all nexus-sync errors."""


class ConfigurationError(NexusSyncError):
    """Raised when the sync endpoints are invalid or would result in a no-op."""


class TransportError(NexusSyncError):
    """Raised on connection, TLS, DNS or timeout failures."""


class ResponseError(NexusSyncError):
    """Raised on a non-success HTTP status or an unparsable response body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CancellationError(NexusSyncError):
    """Raised when work is abandoned because the run was cancelled."""

    def __init__(self, message: str = "operation cancelled", reason: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.reason = reason


class TransferError(NexusSyncError):
    """Raised when a single download-to-upload attempt fails."""


class PoolClosedError(NexusSyncError):
    """Raised when work is submitted to a worker pool that has been released."""


class PipeClosedError(NexusSyncError):
    """Raised when one end of a byte pipe is used after the pipe was closed."""


__all__ = [
    "NexusSyncError",
    "ConfigurationError",
    "TransportError",
    "ResponseError",
    "CancellationError",
    "TransferError",
    "PoolClosedError",
    "PipeClosedError",
]
