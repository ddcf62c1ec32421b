"""Tests for logging_utils module."""

import logging

import pytest

from nexus_sync.utils.logging_utils import format_count_with_unit, log_list_items, log_summary_separator


class TestFormatCountWithUnit:
    """Test format_count_with_unit function."""

    @pytest.mark.parametrize(
        "count,unit,singular,expected",
        [
            (0, "item", None, "0 items"),
            (1, "item", None, "1 item"),
            (3, "attempts", None, "3 attempts"),
            (1, "entries", "entry", "1 entry"),
        ],
    )
    def test_pluralization(self, count, unit, singular, expected):
        """Test counts are pluralized."""
        assert format_count_with_unit(count, unit, singular=singular) == expected


class TestLogHelpers:
    """Test separator and list logging helpers."""

    def test_separator_with_title(self, logger, caplog):
        """Test title is framed by separator lines."""
        with caplog.at_level(logging.INFO, logger="nexus_sync"):
            log_summary_separator(logger, "SYNC SUMMARY", width=10)

        assert [r.getMessage() for r in caplog.records] == ["=" * 10, "SYNC SUMMARY", "=" * 10]

    def test_list_items(self, logger, caplog):
        """Test each item is prefixed."""
        with caplog.at_level(logging.INFO, logger="nexus_sync"):
            log_list_items(logger, ["a", "b"], prefix="* ")

        assert [r.getMessage() for r in caplog.records] == ["* a", "* b"]
