"""
Load a browser history store into a private in-memory database.

The store file is read once, in full, and handed to sqlite via
``Connection.deserialize``. The browser keeps writing to the original file;
searches only ever see the snapshot taken at load time. The in-memory copy is
switched to ``query_only`` so nothing can modify it.

Companion -wal files are not merged: entries the browser has not yet
checkpointed into places.sqlite are not visible until it does.
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path
from typing import Optional, Union

from core.logging import get_logger

from ._schemas import PLACES_TABLE, REQUIRED_PLACES_COLUMNS, SQLITE_HEADER
from .errors import StoreUnavailable, StoreUnreadable

logger = get_logger("history_search.loader")


class DatabaseLoader:
    """
    Build a read-only in-memory database from a history store file.

    Usage:
        with DatabaseLoader(path) as conn:
            rows = conn.execute(sql, params).fetchall()
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def load(self) -> sqlite3.Connection:
        """
        Read the store and return a connection to its in-memory copy.

        Raises:
            StoreUnavailable: If the store file does not exist
            StoreUnreadable: If the file cannot be read or is not a history store
        """
        if not self.db_path.is_file():
            raise StoreUnavailable(f"History store not found: {self.db_path}")

        started = time.perf_counter()
        try:
            payload = self.db_path.read_bytes()
        except OSError as exc:
            raise StoreUnreadable(f"Cannot read history store {self.db_path}: {exc}") from exc

        if not payload.startswith(SQLITE_HEADER):
            raise StoreUnreadable(
                f"Not a SQLite database ({len(payload)} bytes): {self.db_path}"
            )

        conn = sqlite3.connect(":memory:")
        try:
            conn.deserialize(_without_wal_flag(payload))
            conn.execute("PRAGMA query_only = ON")
            _verify_places_table(conn)
        except sqlite3.Error as exc:
            conn.close()
            raise StoreUnreadable(f"Corrupt history store {self.db_path}: {exc}") from exc
        except StoreUnreadable:
            conn.close()
            raise

        logger.debug(
            "Loaded %s (%d bytes) in %.1f ms",
            self.db_path, len(payload), (time.perf_counter() - started) * 1000,
        )
        self._conn = conn
        return conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> sqlite3.Connection:
        return self.load()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _verify_places_table(conn: sqlite3.Connection) -> None:
    """Raise StoreUnreadable unless moz_places has the queried columns."""
    columns = {row[1] for row in conn.execute(f"PRAGMA table_info({PLACES_TABLE})")}
    if not columns:
        raise StoreUnreadable(f"History store has no {PLACES_TABLE} table")
    missing = REQUIRED_PLACES_COLUMNS - columns
    if missing:
        raise StoreUnreadable(
            f"{PLACES_TABLE} is missing columns: {', '.join(sorted(missing))}"
        )


def _without_wal_flag(payload: bytes) -> bytes:
    """
    Rewrite the header's file format versions from WAL (2) to legacy (1).

    An in-memory database cannot open in WAL mode, and browsers keep
    places.sqlite in WAL mode.
    """
    if payload[18:20] == b"\x02\x02":
        return payload[:18] + b"\x01\x01" + payload[20:]
    return payload
