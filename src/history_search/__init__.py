"""
Browser history search engine.

Loads a Firefox-family places.sqlite snapshot into memory and answers
title substring queries with the most recently visited places.
"""

from .errors import HistorySearchError, QueryFailure, StoreUnavailable, StoreUnreadable  # noqa: F401
from .executor import HistorySearchExecutor, map_history_row  # noqa: F401
from .loader import DatabaseLoader  # noqa: F401
from .locator import StoreLocator  # noqa: F401
from .models import HistoryEntry, SearchOutcome, SearchResult  # noqa: F401
from .query import MAX_RESULTS, HistoryQuery, build_history_query, split_terms  # noqa: F401
