"""
nexus-sync - Mirror artifacts between Nexus repositories.

This package lists two Nexus repositories, selects the source artifacts that
are missing or changed at the destination (by path and SHA-1), and streams
them across with bounded concurrency, retries and cooperative cancellation.
"""

from ._version import __version__

# Import main classes and functions for easy access
from .api import NexusClient
from .exceptions import (
    CancellationError,
    ConfigurationError,
    NexusSyncError,
    ResponseError,
    TransferError,
    TransportError,
)
from .models import NexusEndpoint, RepositoryItem, SyncContext, SyncResult, SyncStatus
from .sync import CancelSignal, RunCoordinator, WorkerPool, compute_diff
from .utils import create_session_with_retry, get_logger, setup_logging, WrappingFormatter
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "NexusClient",
    "NexusSyncError",
    "ConfigurationError",
    "TransportError",
    "ResponseError",
    "CancellationError",
    "TransferError",
    "NexusEndpoint",
    "RepositoryItem",
    "SyncContext",
    "SyncResult",
    "SyncStatus",
    "CancelSignal",
    "RunCoordinator",
    "WorkerPool",
    "compute_diff",
    "create_session_with_retry",
    "get_logger",
    "setup_logging",
    "WrappingFormatter",
    "cli_main",
    "cli_group",
]
