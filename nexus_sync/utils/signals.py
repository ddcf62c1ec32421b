"""
Process signal wiring.

The first SIGINT/SIGTERM cancels the run so in-flight work can wind down;
a second one raises KeyboardInterrupt to abort immediately.
"""

import logging
import signal
import threading
from types import FrameType
from typing import TYPE_CHECKING, Callable, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..sync.cancel import CancelSignal

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def install_signal_handlers(cancel: "CancelSignal", logger: logging.Logger) -> Callable[[], None]:
    """
    Cancel a signal on the first shutdown signal received by the process.

    Must be called from the main thread.

    Args:
        cancel: Signal to cancel
        logger: Logger to report the interruption on

    Returns:
        A function restoring the previous handlers
    """
    received = threading.Event()
    previous: Dict[int, object] = {}

    def _handler(signum: int, frame: Optional[FrameType]) -> None:
        if received.is_set():
            raise KeyboardInterrupt
        received.set()
        name = signal.Signals(signum).name
        logger.warning("Received %s, cancelling sync (repeat to abort immediately)", name)
        cancel.cancel(f"interrupted by {name}")

    for signum in SHUTDOWN_SIGNALS:
        previous[signum] = signal.signal(signum, _handler)

    def restore() -> None:
        for signum, handler in previous.items():
            signal.signal(signum, handler)  # type: ignore[arg-type]

    return restore


__all__ = ["install_signal_handlers", "SHUTDOWN_SIGNALS"]
