"""
Resolve the history store path for the configured browser.

The locator never opens the store. It returns the best candidate path, or
the conventional default location when no profile exists, and leaves the
existence check to the search executor.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from core.logging import get_logger

from ._patterns import PLACES_FILENAME, get_preferred_profiles, get_profile_roots

logger = get_logger("history_search.locator")


class StoreLocator:
    """
    Find places.sqlite for one browser.

    Args:
        browser: Browser key from HISTORY_STORE_PATTERNS
        places_path: Explicit store path; wins over profile discovery
        home: Home directory profile roots are relative to
        extra_roots: Additional profile roots (absolute) to scan
        platform: ``sys.platform`` value selecting the root set
    """

    def __init__(
        self,
        browser: str = "firefox",
        places_path: Optional[Union[str, Path]] = None,
        *,
        home: Optional[Path] = None,
        extra_roots: Sequence[Path] = (),
        platform: str = sys.platform,
    ) -> None:
        self.browser = browser
        self.places_path = Path(places_path).expanduser() if places_path else None
        self.home = home if home is not None else Path.home()
        self.extra_roots = [Path(p) for p in extra_roots]
        self.platform = platform

    def resolve_path(self) -> Path:
        """Return the absolute path of the history store to search."""
        if self.places_path is not None:
            return self.places_path.absolute()

        candidates = self.find_candidates()
        if candidates:
            chosen = self._rank(candidates)[0]
            logger.debug("Resolved %s history store: %s", self.browser, chosen)
            return chosen

        default = self.default_path()
        logger.debug("No %s profile found, expecting %s", self.browser, default)
        return default

    def profile_roots(self) -> List[Path]:
        """Existing profile root directories, configured roots first."""
        roots: List[Path] = [p for p in self.extra_roots if p.is_dir()]
        for pattern in get_profile_roots(self.browser, self.platform):
            roots.extend(p for p in sorted(self.home.glob(pattern)) if p.is_dir())
        return roots

    def find_candidates(self) -> List[Path]:
        """All places.sqlite files under the profile roots."""
        found: List[Path] = []
        for root in self.profile_roots():
            # Tor Browser style: store directly in the root
            direct = root / PLACES_FILENAME
            if direct.is_file():
                found.append(direct.absolute())
            found.extend(p.absolute() for p in sorted(root.glob(f"*/{PLACES_FILENAME}")) if p.is_file())
        return _unique(found)

    def default_path(self) -> Path:
        """Conventional location used when no profile exists yet."""
        roots = get_profile_roots(self.browser, self.platform)
        if not roots:
            return (self.home / PLACES_FILENAME).absolute()
        root = roots[0].replace("*", "")
        profile = get_preferred_profiles(self.browser)[0].lstrip(".")
        return (self.home / root / profile / PLACES_FILENAME).absolute()

    def _rank(self, candidates: List[Path]) -> List[Path]:
        preferred = get_preferred_profiles(self.browser)

        def sort_key(path: Path):
            profile = path.parent.name
            rank = len(preferred)
            for index, suffix in enumerate(preferred):
                if profile.endswith(suffix):
                    rank = index
                    break
            try:
                mtime = path.stat().st_mtime
            except OSError:
                mtime = 0.0
            return (rank, -mtime)

        return sorted(candidates, key=sort_key)


def _unique(paths: Iterable[Path]) -> List[Path]:
    seen = set()
    unique: List[Path] = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            unique.append(path)
    return unique
