"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import StrEnum


class Browser(StrEnum):
    """Supported browser identifiers matching HISTORY_STORE_PATTERNS keys."""

    FIREFOX = "firefox"
    FIREFOX_ESR = "firefox_esr"
    TOR = "tor"
    LIBREWOLF = "librewolf"
    WATERFOX = "waterfox"

    @classmethod
    def all_browsers(cls) -> tuple["Browser", ...]:
        """Return all supported browsers."""
        return tuple(cls)


class SearchStatus(StrEnum):
    """Terminal states of a single history search."""

    RESULTS = "results"
    EMPTY = "empty"            # Search succeeded, nothing matched
    UNAVAILABLE = "unavailable"  # Store missing, unreadable or query failed
