"""
Run coordination for a sync.

A run goes through the following phases:

    1. Fetching  - both repository listings are fetched concurrently on the pool
    2. Diffing   - source items missing or changed at the destination are selected
    3. Transfer  - one task per selected item is submitted to the pool, each
                   making up to ``max_attempts`` streamed copy attempts
    4. Reporting - outcomes are aggregated into a SyncResult and logged

A failing fetch cancels the run, so the sibling fetch stops at its next page
and no transfer is ever submitted. Transfer failures are isolated per item and
never change the run-level status.
"""

import logging
from concurrent.futures import Future, wait
from typing import Dict, List, Optional, Tuple

from .._version import __version__
from ..api.nexus_client import NexusClient
from ..exceptions import CancellationError, NexusSyncError
from ..models.context import SyncContext
from ..models.results import SyncResult, SyncStatus, TransferOutcome, TransferOutcomes, TransferTask
from ..utils.constants import MAX_TRANSFER_ATTEMPTS
from ..utils.error_handling import handle_generic_error, handle_http_error
from .cancel import CancelSignal
from .diff import compute_diff
from .fetch import MetadataFetcher, RepositorySnapshot
from .pool import WorkerPool
from .reporting import log_sync_report
from .stream import StreamCopier


class RunCoordinator:
    """Orchestrates one sync run from listing to report."""

    def __init__(
        self,
        context: SyncContext,
        pool: WorkerPool,
        source_client: NexusClient,
        destination_client: NexusClient,
        logger: logging.Logger,
        copier: Optional[StreamCopier] = None,
        max_attempts: int = MAX_TRANSFER_ATTEMPTS,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            context: Run settings (endpoints, dry-run flag)
            pool: Worker pool shared by the fetches and the transfers
            source_client: Client of the repository artifacts are copied from
            destination_client: Client of the repository artifacts are copied to
            logger: Logger of the run; components receive children of it
            copier: Optional copier, built from the two clients when omitted
            max_attempts: Attempts per item before it is recorded as failed

        Raises:
            ValueError: If max_attempts is lower than 1
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        self.context = context
        self.pool = pool
        self.source_client = source_client
        self.destination_client = destination_client
        self.logger = logger
        self.copier = copier or StreamCopier(source_client, destination_client, logger.getChild("stream"))
        self.max_attempts = max_attempts

    def run(self, cancel: Optional[CancelSignal] = None) -> SyncResult:
        """
        Run the sync.

        Args:
            cancel: Caller's cancellation signal; the run derives a child from it

        Returns:
            SyncResult with the run-level status and per-item outcomes
        """
        run_signal = (cancel if cancel is not None else CancelSignal()).child()

        self.logger.info(
            "nexus-sync %s: %s -> %s",
            __version__,
            self.context.source.describe(),
            self.context.destination.describe(),
        )

        result = self._run(run_signal)
        log_sync_report(result, self.logger)
        return result

    # ========================================================================
    # Fetching
    # ========================================================================

    def _fetch(self, side: str, client: NexusClient, run_signal: CancelSignal) -> RepositorySnapshot:
        """Fetch one side's listing, cancelling the run if it fails."""
        fetcher = MetadataFetcher(client, self.logger.getChild(f"fetch.{side}"))
        operation = f"fetch of {side} {client.endpoint.describe()}"
        try:
            return fetcher.fetch_all(run_signal)
        except CancellationError:
            self.logger.debug("%s abandoned", operation)
            raise
        except NexusSyncError as e:
            handle_http_error(e, operation, self.logger)
            run_signal.cancel(e)
            raise
        except Exception as e:
            handle_generic_error(e, operation, self.logger)
            run_signal.cancel(e)
            raise

    def _fetch_both(
        self, run_signal: CancelSignal
    ) -> Tuple[Optional[RepositorySnapshot], Optional[RepositorySnapshot], List[BaseException]]:
        """Fetch both listings concurrently and wait for both to finish."""
        source_future = self.pool.submit(self._fetch, "source", self.source_client, run_signal)
        destination_future = self.pool.submit(self._fetch, "destination", self.destination_client, run_signal)
        wait([source_future, destination_future])

        errors: List[BaseException] = []
        snapshots: List[Optional[RepositorySnapshot]] = []
        for future in (source_future, destination_future):
            error = future.exception()
            if error is None:
                snapshots.append(future.result())
                continue
            snapshots.append(None)
            if not isinstance(error, CancellationError):
                errors.append(error)

        return snapshots[0], snapshots[1], errors

    # ========================================================================
    # Transferring
    # ========================================================================

    def _build_tasks(self, diff: RepositorySnapshot) -> List[TransferTask]:
        """Attach the destination locator to every diffed item."""
        return [
            TransferTask(item=item, destination_url=self.destination_client.upload_url(path))
            for path, item in sorted(diff.items())
        ]

    def _transfer_with_retry(self, task: TransferTask, outcomes: TransferOutcomes, run_signal: CancelSignal) -> None:
        """Copy one item, retrying failed attempts, and record its outcome."""
        attempts = 0
        last_error: Optional[BaseException] = None

        while attempts < self.max_attempts:
            try:
                run_signal.raise_if_cancelled(f"transfer of {task.path}")
            except CancellationError as e:
                last_error = e
                break

            attempts += 1
            try:
                self.copier.transfer(task, run_signal)
            except CancellationError as e:
                last_error = e
                break
            except NexusSyncError as e:
                last_error = e
                self.logger.warning(
                    "Attempt %d/%d to transfer %s failed: %s", attempts, self.max_attempts, task.path, e
                )
                continue
            except Exception as e:  # isolated to this item
                last_error = e
                handle_generic_error(e, f"transfer of {task.path}", self.logger)
                break

            self.logger.info("Transferred %s", task.path)
            outcomes.record(TransferOutcome.success(task.path, attempts))
            return

        outcomes.record(TransferOutcome.failure(task.path, attempts, last_error or "transfer not attempted"))

    def _transfer_all(self, tasks: List[TransferTask], run_signal: CancelSignal) -> Dict[str, TransferOutcome]:
        """Submit one retrying task per item and wait for all of them."""
        outcomes = TransferOutcomes()
        futures: List[Future] = []
        skipped: List[TransferTask] = []

        for index, task in enumerate(tasks):
            if run_signal.cancelled:
                skipped = tasks[index:]
                break
            futures.append(self.pool.submit(self._transfer_with_retry, task, outcomes, run_signal))

        if skipped:
            self.logger.warning("Run cancelled, %d item(s) not submitted", len(skipped))
            for task in skipped:
                outcomes.record(TransferOutcome.failure(task.path, 0, f"not started: {run_signal.reason}"))

        wait(futures)
        for future in futures:
            future.result()

        return outcomes.snapshot()

    # ========================================================================
    # Run
    # ========================================================================

    def _run(self, run_signal: CancelSignal) -> SyncResult:
        source, destination, errors = self._fetch_both(run_signal)

        if errors:
            reason = run_signal.reason
            first = reason if isinstance(reason, BaseException) and reason in errors else errors[0]
            return SyncResult(status=SyncStatus.FAILED, error=str(first))
        if run_signal.cancelled or source is None or destination is None:
            return SyncResult(status=SyncStatus.CANCELLED, error=str(run_signal.reason or "cancelled"))

        diff = compute_diff(source, destination)
        diff_paths = sorted(diff)
        self.logger.info(
            "%d of %d source item(s) missing or changed at the destination", len(diff), len(source)
        )

        counts = {"source_count": len(source), "destination_count": len(destination)}
        if not diff:
            self.logger.info("Destination is up to date, no-op")
            return SyncResult(status=SyncStatus.COMPLETED, **counts)

        if self.context.dry_run:
            return SyncResult(status=SyncStatus.COMPLETED, diff_paths=diff_paths, dry_run=True, **counts)

        outcomes = self._transfer_all(self._build_tasks(diff), run_signal)

        if run_signal.cancelled:
            return SyncResult(
                status=SyncStatus.CANCELLED,
                error=str(run_signal.reason or "cancelled"),
                diff_paths=diff_paths,
                outcomes=outcomes,
                **counts,
            )
        return SyncResult(status=SyncStatus.COMPLETED, diff_paths=diff_paths, outcomes=outcomes, **counts)


__all__ = ["RunCoordinator"]
