"""Exceptions raised inside the history search engine.

None of these reach the UI: the search executor folds them into
``SearchStatus.UNAVAILABLE``.
"""

from __future__ import annotations


class HistorySearchError(Exception):
    """Base class for history search failures."""


class StoreUnavailable(HistorySearchError):
    """The history store file does not exist at the resolved path."""


class StoreUnreadable(StoreUnavailable):
    """The history store exists but cannot be read or parsed as a database."""


class QueryFailure(HistorySearchError):
    """The query engine failed, or returned rows that do not fit the row schema."""
