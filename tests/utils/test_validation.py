"""Tests for endpoint validation utilities."""

import pytest

from nexus_sync.exceptions import ConfigurationError
from nexus_sync.models import NexusEndpoint
from nexus_sync.utils.validation import validate_endpoint_url, validate_sync_endpoints


def _endpoint(url="http://localhost:8081", repository="maven-releases", user="admin"):
    return NexusEndpoint(url=url, user=user, password="admin123", repository=repository)


class TestValidateEndpointUrl:
    """Test validate_endpoint_url function."""

    @pytest.mark.parametrize("url", ["http://localhost:8081", "https://repo.example.com/nexus"])
    def test_valid(self, url):
        """Test http(s) URLs with a host pass."""
        validate_endpoint_url(url)

    @pytest.mark.parametrize("url", ["ftp://repo.example.com", "localhost:8081", "http://", "not a url"])
    def test_invalid(self, url):
        """Test malformed URLs are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid URL"):
            validate_endpoint_url(url)


class TestValidateSyncEndpoints:
    """Test validate_sync_endpoints function."""

    def test_distinct_repositories(self):
        """Test same server with different repositories is allowed."""
        validate_sync_endpoints(_endpoint(), _endpoint(repository="maven-mirror"))

    def test_distinct_servers(self):
        """Test same repository name on different servers is allowed."""
        validate_sync_endpoints(_endpoint(), _endpoint(url="http://mirror:8081"))

    def test_same_endpoint_rejected(self):
        """Test syncing a repository onto itself is a no-op error."""
        with pytest.raises(ConfigurationError, match="The same 'from' and 'to'"):
            validate_sync_endpoints(_endpoint(), _endpoint(user="other"))

    def test_same_endpoint_case_insensitive(self):
        """Test comparison ignores case and trailing slashes."""
        with pytest.raises(ConfigurationError, match="no-op"):
            validate_sync_endpoints(
                _endpoint(), _endpoint(url="HTTP://LOCALHOST:8081/", repository="Maven-Releases")
            )

    def test_invalid_destination_url(self):
        """Test URLs are validated before comparison."""
        with pytest.raises(ConfigurationError, match="Invalid URL"):
            validate_sync_endpoints(_endpoint(), _endpoint(url="file:///tmp/repo"))
