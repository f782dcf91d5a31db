"""
Timestamp conversion utilities for browser history stores.

Firefox-family browsers (Firefox, Firefox ESR, Tor Browser, LibreWolf,
Waterfox) store visit times as PRTime: microseconds since
1970-01-01 00:00:00 UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

# Upper bound accepted for converted timestamps (year 3000)
MAX_UNIX_SECONDS = 32503680000


def prtime_to_datetime(microseconds: Optional[int]) -> Optional[datetime]:
    """
    Convert PRTime timestamp to datetime.

    Args:
        microseconds: PRTime timestamp (microseconds since 1970)

    Returns:
        datetime in UTC, or None if missing/zero/out of range
    """
    if not microseconds or microseconds <= 0:
        return None

    try:
        unix_seconds = microseconds / 1_000_000
        if unix_seconds > MAX_UNIX_SECONDS:
            return None
        return datetime.fromtimestamp(unix_seconds, tz=timezone.utc)
    except (ValueError, OSError, OverflowError):
        return None


def prtime_to_iso(microseconds: Optional[int]) -> Optional[str]:
    """Convert PRTime timestamp to ISO 8601 string (None if invalid)."""
    dt = prtime_to_datetime(microseconds)
    return dt.isoformat() if dt else None


def datetime_to_prtime(dt: datetime) -> int:
    """
    Convert datetime to PRTime microseconds.

    Naive datetimes are treated as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1_000_000)


def format_visit_time(dt: Optional[datetime]) -> str:
    """Render a visit time for display, e.g. ``2024-03-01 14:05 UTC``."""
    if dt is None:
        return "never visited"
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
