"""
Cooperative cancellation for sync runs.

A CancelSignal is observed by fetches and transfers at their suspension points
(before a request, between streamed chunks). Children derived with ``child()``
are cancelled together with their parent, but cancelling a child leaves the
parent untouched.
"""

import threading
from typing import Optional, Union

from ..exceptions import CancellationError


class CancelSignal:
    """Thread-safe, one-shot cancellation flag with an optional parent."""

    def __init__(self, parent: Optional["CancelSignal"] = None) -> None:
        self._parent = parent
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Optional[Union[BaseException, str]] = None

    def child(self) -> "CancelSignal":
        """Derive a signal that is also cancelled when this one is."""
        return CancelSignal(parent=self)

    def cancel(self, reason: Optional[Union[BaseException, str]] = None) -> bool:
        """
        Cancel the signal.

        Only the first call records its reason.

        Args:
            reason: Error or message explaining the cancellation

        Returns:
            True if this call cancelled the signal, False if it was already cancelled
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._reason = reason
            self._event.set()
            return True

    @property
    def cancelled(self) -> bool:
        """Check whether this signal or one of its ancestors was cancelled."""
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def reason(self) -> Optional[Union[BaseException, str]]:
        """Reason of the nearest cancelled signal, None if not cancelled."""
        if self._event.is_set():
            return self._reason
        if self._parent is not None:
            return self._parent.reason
        return None

    def raise_if_cancelled(self, operation: str = "operation") -> None:
        """
        Raise CancellationError if the signal was cancelled.

        Args:
            operation: Description of the work being abandoned
        """
        if not self.cancelled:
            return
        reason = self.reason
        message = f"{operation} cancelled"
        if reason is not None:
            message = f"{message}: {reason}"
        raise CancellationError(message, reason=reason if isinstance(reason, BaseException) else None)


__all__ = ["CancelSignal"]
