"""
Bounded worker pool.

A fixed-size thread pool whose ``submit`` blocks while all workers are busy,
so work is throttled at the producer instead of queueing without bound.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

from ..exceptions import PoolClosedError

T = TypeVar("T")


class WorkerPool:
    """
    Fixed-capacity executor gated by a semaphore.

    At most ``capacity`` submitted tasks are admitted at any time; further
    submissions block until a running task finishes. The pool is released
    explicitly with ``release()`` or by leaving a ``with`` block.

    Example:
        >>> with WorkerPool(4, logger) as pool:
        ...     future = pool.submit(pow, 2, 10)
        ...     future.result()
        1024
    """

    def __init__(self, capacity: int, logger: logging.Logger, name: str = "nexus-sync") -> None:
        """
        Initialize the pool.

        Args:
            capacity: Maximum number of concurrently running tasks
            logger: Logger for lifecycle messages
            name: Thread name prefix of the workers

        Raises:
            ValueError: If capacity is lower than 1
        """
        if capacity < 1:
            raise ValueError(f"Worker pool capacity must be at least 1, got {capacity}")

        self.capacity = capacity
        self.name = name
        self.logger = logger
        self._slots = threading.BoundedSemaphore(capacity)
        self._lock = threading.Lock()
        self._in_flight = 0
        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=capacity, thread_name_prefix=name)
        self.logger.debug("Worker pool '%s' started with %d workers", name, capacity)

    @property
    def in_flight(self) -> int:
        """Number of tasks admitted and not yet finished."""
        with self._lock:
            return self._in_flight

    @property
    def closed(self) -> bool:
        """Check whether the pool has been released."""
        with self._lock:
            return self._closed

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """
        Submit a task, blocking while the pool is at capacity.

        Args:
            fn: Callable to run on a worker
            *args: Positional arguments for ``fn``
            **kwargs: Keyword arguments for ``fn``

        Returns:
            Future of the task's result

        Raises:
            PoolClosedError: If the pool has been released
        """
        if self.closed:
            raise PoolClosedError(f"Worker pool '{self.name}' is released")

        self._slots.acquire()
        with self._lock:
            if self._closed:
                self._slots.release()
                raise PoolClosedError(f"Worker pool '{self.name}' is released")
            self._in_flight += 1

        try:
            future = self._executor.submit(fn, *args, **kwargs)
        except BaseException:
            self._free_slot()
            raise

        future.add_done_callback(lambda _: self._free_slot())
        return future

    def _free_slot(self) -> None:
        with self._lock:
            self._in_flight -= 1
        self._slots.release()

    def release(self, wait: bool = True) -> None:
        """
        Shut the pool down.

        Safe to call several times and after failed submissions.

        Args:
            wait: Wait for in-flight tasks to finish; when False, tasks that
                have not started yet are cancelled and the call returns at once
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True

        self._executor.shutdown(wait=wait, cancel_futures=not wait)
        self.logger.debug("Worker pool '%s' released", self.name)

    def __enter__(self) -> "WorkerPool":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], exc_tb: Optional[Any]) -> None:
        """Context manager exit - ensures the pool is released."""
        # Don't block an abort on in-flight transfers
        self.release(wait=exc_type is not KeyboardInterrupt)


__all__ = ["WorkerPool"]
