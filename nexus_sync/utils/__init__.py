"""
Utility modules for nexus-sync operations.
"""

from .logger import setup_logging, WrappingFormatter, get_logger
from .session import create_session_with_retry
from .url import build_assets_url, build_upload_url, join_url

from . import error_handling
from . import logging_utils
from . import constants
from . import config_manager
from . import signals

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "get_logger",
    "create_session_with_retry",
    "build_assets_url",
    "build_upload_url",
    "join_url",
    "error_handling",
    "logging_utils",
    "constants",
    "config_manager",
    "signals",
]
