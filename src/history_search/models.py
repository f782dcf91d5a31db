"""Typed records produced by a history search."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional, Tuple

from core.enums import SearchStatus


@dataclass(frozen=True)
class HistoryEntry:
    """Single place from the browser history store."""

    id: int  # moz_places.id, only unique within one store
    url: str
    title: str  # "" when the store has no title
    last_visited: Optional[datetime]  # UTC; None if never visited

    @property
    def display_title(self) -> str:
        return self.title or self.url


@dataclass(frozen=True)
class SearchOutcome:
    """Terminal state of one executed search."""

    status: SearchStatus
    entries: Tuple[HistoryEntry, ...] = ()

    @classmethod
    def results(cls, entries) -> "SearchOutcome":
        entries = tuple(entries)
        if not entries:
            return cls.empty()
        return cls(SearchStatus.RESULTS, entries)

    @classmethod
    def empty(cls) -> "SearchOutcome":
        return cls(SearchStatus.EMPTY)

    @classmethod
    def unavailable(cls) -> "SearchOutcome":
        return cls(SearchStatus.UNAVAILABLE)

    @property
    def is_unavailable(self) -> bool:
        return self.status is SearchStatus.UNAVAILABLE


@dataclass(frozen=True)
class SearchResult:
    """
    State published to the launcher UI.

    ``is_loading`` is independent of the other fields: while a newer search
    is running the previously settled ``data`` and ``error_view`` stay in
    place.
    """

    data: Tuple[HistoryEntry, ...] = ()
    is_loading: bool = False
    error_view: Optional[Any] = field(default=None, compare=False)

    def loading(self) -> "SearchResult":
        """Copy of this result flagged as loading."""
        return replace(self, is_loading=True)

    @classmethod
    def settled(cls, outcome: SearchOutcome, error_view: Optional[Any] = None) -> "SearchResult":
        if outcome.is_unavailable:
            return cls(data=(), is_loading=False, error_view=error_view)
        return cls(data=outcome.entries, is_loading=False, error_view=None)
