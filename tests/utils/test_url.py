"""Tests for URL utilities."""

import pytest

from nexus_sync.utils.url import build_assets_url, build_upload_url, join_url, normalize_base_url


class TestJoinUrl:
    """Test join_url function."""

    @pytest.mark.parametrize(
        "base,expected",
        [
            ("http://localhost:8081", "http://localhost:8081/service/rest/v1/assets"),
            ("http://localhost:8081/", "http://localhost:8081/service/rest/v1/assets"),
            ("https://repo.example.com/nexus", "https://repo.example.com/nexus/service/rest/v1/assets"),
            ("https://repo.example.com/nexus/", "https://repo.example.com/nexus/service/rest/v1/assets"),
        ],
    )
    def test_keeps_context_path(self, base, expected):
        """Test the base URL's own path is preserved."""
        assert join_url(base, "/service/rest/v1/assets") == expected

    def test_build_assets_url(self):
        """Test listing endpoint."""
        assert build_assets_url("http://nexus:8081") == "http://nexus:8081/service/rest/v1/assets"


class TestBuildUploadUrl:
    """Test build_upload_url function."""

    def test_basic(self):
        """Test repository and path are joined."""
        url = build_upload_url("http://localhost:8081", "maven-releases", "org/acme/app/1.0/app-1.0.pom")
        assert url == "http://localhost:8081/repository/maven-releases/org/acme/app/1.0/app-1.0.pom"

    def test_quotes_path_segments(self):
        """Test unsafe characters are quoted but slashes kept."""
        url = build_upload_url("http://localhost:8081", "raw", "docs/release notes#1.txt")
        assert url == "http://localhost:8081/repository/raw/docs/release%20notes%231.txt"

    def test_leading_slash_ignored(self):
        """Test absolute item paths don't produce a double slash."""
        url = build_upload_url("http://localhost:8081", "raw", "/a.txt")
        assert url == "http://localhost:8081/repository/raw/a.txt"


class TestNormalizeBaseUrl:
    """Test normalize_base_url function."""

    def test_case_and_trailing_slash(self):
        """Test equivalent spellings normalize to the same value."""
        assert normalize_base_url("HTTP://LocalHost:8081/") == normalize_base_url("http://localhost:8081")
