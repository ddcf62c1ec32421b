"""
Central constants for the nexus-sync package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# Nexus REST API
# ============================================================================

# Paginated asset listing endpoint
ASSETS_API_PATH = "/service/rest/v1/assets"

# Prefix under which repository content is served and uploaded
REPOSITORY_CONTENT_PATH = "/repository"

# Query parameter names of the listing endpoint
REPOSITORY_PARAM = "repository"
CONTINUATION_TOKEN_PARAM = "continuationToken"

# ============================================================================
# Command Line Defaults
# ============================================================================

DEFAULT_URL = "http://localhost:8081"
DEFAULT_USER = "admin"
DEFAULT_PASSWORD = "admin123"  # nosec B105
DEFAULT_REPOSITORY = "maven-releases"

# ============================================================================
# API and Network Constants
# ============================================================================

# Default timeout for HTTP requests (seconds); large artifacts stream through a
# single request so this is generous
DEFAULT_TIMEOUT = 300.0

# Connect timeout (seconds)
DEFAULT_CONNECT_TIMEOUT = 30.0

# Default number of concurrent workers shared by fetches and transfers
DEFAULT_MAX_WORKERS = 16

# ============================================================================
# Transfer Constants
# ============================================================================

# Attempts per item before it is recorded as a permanent failure
MAX_TRANSFER_ATTEMPTS = 3

# Size of chunks read from a download response (bytes)
DEFAULT_CHUNK_SIZE = 64 * 1024

# Number of chunks buffered between a download and its upload
DEFAULT_PIPE_CHUNKS = 16

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Width for separator lines in console output
SEPARATOR_WIDTH = 80

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C twice

# ============================================================================
# URL Patterns
# ============================================================================

# URL schemes accepted for Nexus endpoints
SUPPORTED_URL_SCHEMES = ("http", "https")


__all__ = [
    # Nexus REST API
    "ASSETS_API_PATH",
    "REPOSITORY_CONTENT_PATH",
    "REPOSITORY_PARAM",
    "CONTINUATION_TOKEN_PARAM",
    # Command Line Defaults
    "DEFAULT_URL",
    "DEFAULT_USER",
    "DEFAULT_PASSWORD",
    "DEFAULT_REPOSITORY",
    # API and Network
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_MAX_WORKERS",
    # Transfer
    "MAX_TRANSFER_ATTEMPTS",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_PIPE_CHUNKS",
    # Logging and Display
    "SEPARATOR_WIDTH",
    # Exit Codes
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_USER_INTERRUPT",
    # URL Patterns
    "SUPPORTED_URL_SCHEMES",
]
