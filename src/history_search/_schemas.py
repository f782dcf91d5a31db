"""
Fixed history-store shape queried by the search engine.

Only moz_places is read. Its shape has been stable since Firefox 3:
    id INTEGER PRIMARY KEY, url LONGVARCHAR, title LONGVARCHAR,
    ..., last_visit_date INTEGER (PRTime, NULL if never visited)

Rows returned by the history query must match HISTORY_ROW_COLUMNS exactly;
anything else is treated as a query failure.
"""

from __future__ import annotations

from typing import Dict, Tuple

PLACES_TABLE = "moz_places"

# Column order of every row returned by the history query
HISTORY_ROW_COLUMNS: Tuple[str, ...] = ("id", "url", "title", "last_visit_date")

# Columns that must exist on PLACES_TABLE for the store to be searchable
REQUIRED_PLACES_COLUMNS = frozenset(HISTORY_ROW_COLUMNS)

# Accepted Python types per column (None means NULL is allowed)
HISTORY_ROW_TYPES: Dict[str, Tuple[type, ...]] = {
    "id": (int,),
    "url": (str,),
    "title": (str, type(None)),
    "last_visit_date": (int, type(None)),
}

SQLITE_HEADER = b"SQLite format 3\x00"
