"""
Sync pipeline for nexus-sync.

This package contains the diff-and-transfer pipeline:
- fetch: paginated listing of one repository
- diff: selection of items missing or changed at the destination
- pool: bounded worker pool shared by fetches and transfers
- stream: streamed download-to-upload copy of one item
- coordinator: orchestration of a whole run
"""

from .cancel import CancelSignal
from .coordinator import RunCoordinator
from .diff import compute_diff, needs_transfer
from .fetch import MetadataFetcher, RepositorySnapshot
from .pool import WorkerPool
from .reporting import log_sync_report, write_results_json
from .stream import BytePipe, StreamCopier

__all__ = [
    "CancelSignal",
    "RunCoordinator",
    "compute_diff",
    "needs_transfer",
    "MetadataFetcher",
    "RepositorySnapshot",
    "WorkerPool",
    "log_sync_report",
    "write_results_json",
    "BytePipe",
    "StreamCopier",
]
