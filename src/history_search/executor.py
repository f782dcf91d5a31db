"""
Run a history search end to end and classify its outcome.

    locate store -> load snapshot -> build query -> execute -> map rows

Every failure along the way ends as ``SearchStatus.UNAVAILABLE``; the UI
shows the same "history not available" notice whether the store is missing,
corrupt, or the query itself failed. An empty match set is not a failure.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Callable, List, Optional, Sequence

from core.logging import get_logger
from core.timestamps import prtime_to_datetime

from ._schemas import HISTORY_ROW_COLUMNS, HISTORY_ROW_TYPES
from .errors import QueryFailure, StoreUnavailable
from .loader import DatabaseLoader
from .locator import StoreLocator
from .models import HistoryEntry, SearchOutcome
from .query import build_history_query

logger = get_logger("history_search.executor")


def map_history_row(row: Sequence[Any]) -> HistoryEntry:
    """
    Convert one (id, url, title, last_visit_date) row to a HistoryEntry.

    Raises:
        QueryFailure: If the row does not have the fixed history row shape
    """
    if len(row) != len(HISTORY_ROW_COLUMNS):
        raise QueryFailure(
            f"Expected {len(HISTORY_ROW_COLUMNS)} columns, got {len(row)}"
        )
    for column, value in zip(HISTORY_ROW_COLUMNS, row):
        # bool is an int subclass but never a valid store value
        if isinstance(value, bool) or not isinstance(value, HISTORY_ROW_TYPES[column]):
            raise QueryFailure(
                f"Column {column!r} has unexpected type {type(value).__name__}"
            )

    place_id, url, title, last_visit_date = row
    return HistoryEntry(
        id=place_id,
        url=url,
        title=title or "",
        last_visited=prtime_to_datetime(last_visit_date),
    )


class HistorySearchExecutor:
    """
    Execute searches against the store a locator resolves.

    A new in-memory snapshot is loaded for every call to ``search``.
    """

    def __init__(
        self,
        locator: StoreLocator,
        loader_factory: Callable[..., DatabaseLoader] = DatabaseLoader,
    ) -> None:
        self.locator = locator
        self.loader_factory = loader_factory

    def search(self, raw_query: Optional[str]) -> SearchOutcome:
        """Search the history store; never raises."""
        try:
            store_path = self.locator.resolve_path()
            present = store_path.is_file()
        except (OSError, ValueError) as exc:
            logger.warning("Cannot resolve history store for %s: %s", self.locator.browser, exc)
            return SearchOutcome.unavailable()
        if not present:
            logger.info("History store not available at %s", store_path)
            return SearchOutcome.unavailable()

        loader = self.loader_factory(store_path)
        try:
            conn = loader.load()
        except StoreUnavailable as exc:
            logger.warning("History store unavailable: %s", exc)
            return SearchOutcome.unavailable()

        try:
            entries = self._run_query(conn, raw_query)
        except (QueryFailure, sqlite3.Error) as exc:
            logger.warning("History query failed for %r: %s", raw_query, exc)
            return SearchOutcome.unavailable()
        finally:
            loader.close()

        if not entries:
            return SearchOutcome.empty()
        return SearchOutcome.results(entries)

    def _run_query(self, conn: sqlite3.Connection, raw_query: Optional[str]) -> List[HistoryEntry]:
        query = build_history_query(raw_query)
        rows = conn.execute(query.sql, query.params).fetchall()
        logger.debug("Query %r matched %d rows", query.terms, len(rows))
        return [map_history_row(row) for row in rows]
