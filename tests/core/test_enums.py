"""Tests for src/core/enums.py - Core enumerations."""

from core.enums import Browser, SearchStatus
from history_search._patterns import get_all_browsers


class TestBrowser:
    """Tests for Browser enum."""

    def test_browser_values(self):
        assert Browser.FIREFOX == "firefox"
        assert Browser.TOR == "tor"

    def test_every_browser_has_store_patterns(self):
        assert set(Browser.all_browsers()) == set(get_all_browsers())


class TestSearchStatus:
    """Tests for SearchStatus enum."""

    def test_values(self):
        assert SearchStatus.RESULTS == "results"
        assert SearchStatus.EMPTY == "empty"
        assert SearchStatus.UNAVAILABLE == "unavailable"
