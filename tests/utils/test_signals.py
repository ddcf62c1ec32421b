"""Tests for process signal wiring."""

import os
import signal

import pytest

from nexus_sync.sync.cancel import CancelSignal
from nexus_sync.utils.signals import install_signal_handlers


@pytest.fixture
def installed(logger):
    """Install handlers on a fresh signal and restore them afterwards."""
    cancel = CancelSignal()
    restore = install_signal_handlers(cancel, logger)
    yield cancel
    restore()


class TestInstallSignalHandlers:
    """Test install_signal_handlers function."""

    def test_first_signal_cancels(self, installed, caplog):
        """Test the first SIGTERM cancels the run instead of exiting."""
        os.kill(os.getpid(), signal.SIGTERM)

        assert installed.cancelled
        assert installed.reason == "interrupted by SIGTERM"
        assert "Received SIGTERM" in caplog.text

    def test_second_signal_aborts(self, installed):
        """Test a repeated signal raises KeyboardInterrupt."""
        os.kill(os.getpid(), signal.SIGINT)
        assert installed.cancelled

        with pytest.raises(KeyboardInterrupt):
            os.kill(os.getpid(), signal.SIGINT)

    def test_restore(self, logger):
        """Test previous handlers are put back."""
        previous = signal.getsignal(signal.SIGTERM)
        restore = install_signal_handlers(CancelSignal(), logger)
        assert signal.getsignal(signal.SIGTERM) is not previous

        restore()

        assert signal.getsignal(signal.SIGTERM) is previous
