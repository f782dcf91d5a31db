"""
Translate launcher input into a bounded, parameterized history query.

Every term becomes a required, case-sensitive substring match against the
place title. Terms are bound as SQL parameters and never spliced into the
statement text, so quotes and LIKE wildcards in user input stay literal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ._schemas import HISTORY_ROW_COLUMNS, PLACES_TABLE

MAX_RESULTS = 30


@dataclass(frozen=True)
class HistoryQuery:
    """SQL statement plus the bound term parameters."""

    sql: str
    params: Tuple[str, ...]

    @property
    def terms(self) -> Tuple[str, ...]:
        return self.params


def split_terms(raw: Optional[str]) -> List[str]:
    """
    Split raw input into search terms.

    Input is trimmed and split on single spaces. Nothing else is dropped, so
    consecutive spaces yield empty terms (which match every titled place).
    Empty or whitespace-only input yields no terms.
    """
    if raw is None:
        return []
    trimmed = raw.strip()
    if not trimmed:
        return []
    return trimmed.split(" ")


def build_where_clause(terms: List[str]) -> str:
    """AND-ed title substring predicates, one ``?`` placeholder per term."""
    return " AND ".join(f"instr({PLACES_TABLE}.title, ?) > 0" for _ in terms)


def build_history_query(raw: Optional[str], limit: int = MAX_RESULTS) -> HistoryQuery:
    """Build the most-recent-first history query for raw launcher input."""
    terms = split_terms(raw)
    columns = ", ".join(HISTORY_ROW_COLUMNS)
    where = f"WHERE {build_where_clause(terms)} " if terms else ""
    sql = (
        f"SELECT {columns} FROM {PLACES_TABLE} "
        f"{where}"
        f"ORDER BY last_visit_date DESC, id DESC LIMIT {int(limit)}"
    )
    return HistoryQuery(sql=sql, params=tuple(terms))
