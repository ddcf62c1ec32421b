"""Result models for sync runs and individual transfers."""

import threading
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from pydantic import ConfigDict, Field

from .base import NexusSyncBaseModel
from .nexus_api import RepositoryItem


class TransferTask(NexusSyncBaseModel):
    """
    A diffed item paired with its resolved destination locator.

    Attributes:
        item: Source repository item to copy
        destination_url: Upload URL on the destination repository
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    item: RepositoryItem
    destination_url: str

    @property
    def path(self) -> str:
        """Relative path of the item being transferred."""
        return self.item.path

    @property
    def download_url(self) -> str:
        """Source URL the item is downloaded from."""
        return self.item.download_url


class TransferOutcome(NexusSyncBaseModel):
    """
    Final outcome of transferring one item.

    Attributes:
        path: Relative path of the item
        succeeded: Whether one of the attempts succeeded
        attempts: Number of attempts made (0 if the item was never started)
        error: Last error observed, None on success
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str
    succeeded: bool
    attempts: int = Field(default=0, ge=0)
    error: Optional[str] = None

    @classmethod
    def success(cls, path: str, attempts: int) -> "TransferOutcome":
        """Build a successful outcome."""
        return cls(path=path, succeeded=True, attempts=attempts)

    @classmethod
    def failure(cls, path: str, attempts: int, error: Union[BaseException, str]) -> "TransferOutcome":
        """Build a failed outcome from the last error observed."""
        return cls(path=path, succeeded=False, attempts=attempts, error=str(error))


class TransferOutcomes:
    """Thread-safe collection of transfer outcomes keyed by item path."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: Dict[str, TransferOutcome] = {}

    def record(self, outcome: TransferOutcome) -> None:
        """
        Record the outcome for a path.

        Raises:
            ValueError: If an outcome was already recorded for the path
        """
        with self._lock:
            if outcome.path in self._outcomes:
                raise ValueError(f"Outcome already recorded for {outcome.path}")
            self._outcomes[outcome.path] = outcome

    def snapshot(self) -> Dict[str, TransferOutcome]:
        """Return a copy of the recorded outcomes."""
        with self._lock:
            return dict(self._outcomes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._outcomes

    def __iter__(self) -> Iterator[TransferOutcome]:
        return iter(self.snapshot().values())


class SyncStatus(str, Enum):
    """Run-level status of a sync."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class SyncResult(NexusSyncBaseModel):
    """
    Result of a sync run.

    The run-level status only reflects the fetch phase and cancellation.
    Per-item transfer failures are reported through ``failures`` and never
    change ``status``.

    Attributes:
        status: Run-level status
        error: Run-level error message (fetch failure or cancellation reason)
        source_count: Number of items listed in the source repository
        destination_count: Number of items listed in the destination repository
        diff_paths: Paths that were new or changed at the source
        outcomes: Per-item transfer outcomes keyed by path
        dry_run: Whether transfers were skipped on purpose

    Example:
        >>> result = SyncResult(status=SyncStatus.COMPLETED)
        >>> result.ok
        True
        >>> result.failed_count
        0
    """

    status: SyncStatus
    error: Optional[str] = None
    source_count: int = Field(default=0, ge=0)
    destination_count: int = Field(default=0, ge=0)
    diff_paths: List[str] = Field(default_factory=list)
    outcomes: Dict[str, TransferOutcome] = Field(default_factory=dict)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        """Check whether the run itself completed."""
        return self.status == SyncStatus.COMPLETED

    @property
    def failures(self) -> Dict[str, TransferOutcome]:
        """Outcomes of items that could not be transferred."""
        return {path: outcome for path, outcome in self.outcomes.items() if not outcome.succeeded}

    @property
    def transferred_count(self) -> int:
        """Number of items transferred successfully."""
        return sum(1 for outcome in self.outcomes.values() if outcome.succeeded)

    @property
    def failed_count(self) -> int:
        """Number of items that failed to transfer."""
        return len(self.failures)

    @property
    def has_failures(self) -> bool:
        """Check if any item failed to transfer."""
        return self.failed_count > 0

    def to_json_dict(self) -> Dict[str, object]:
        """Export the result as a JSON-compatible dictionary."""
        data = self.model_dump(mode="json")
        data["failed"] = sorted(self.failures)
        data["transferred_count"] = self.transferred_count
        data["failed_count"] = self.failed_count
        return data


__all__ = [
    "TransferTask",
    "TransferOutcome",
    "TransferOutcomes",
    "SyncStatus",
    "SyncResult",
]
