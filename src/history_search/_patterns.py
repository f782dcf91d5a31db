"""
Firefox-family history store locations on the local machine.

Covers: Firefox, Firefox ESR, Tor Browser, LibreWolf, Waterfox (all Gecko,
all keep history in places.sqlite with the same moz_places table).
Firefox uses randomized profile names (e.g., abc123.default-release), so
profile roots are scanned for */places.sqlite. Tor Browser keeps a fixed
profile directory (profile.default) directly under its root.

Roots are relative to the user's home directory and may contain glob
wildcards. Keys of the per-platform mapping follow ``sys.platform`` prefixes.

Usage:
    from history_search._patterns import get_profile_roots

    roots = get_profile_roots("firefox", "linux")
"""

from __future__ import annotations

from typing import Any, Dict, List

PLACES_FILENAME = "places.sqlite"

HISTORY_STORE_PATTERNS: Dict[str, Dict[str, Any]] = {
    "firefox": {
        "display_name": "Mozilla Firefox",
        "profile_roots": {
            "win32": ["AppData/Roaming/Mozilla/Firefox/Profiles"],
            "darwin": ["Library/Application Support/Firefox/Profiles"],
            "linux": [
                ".mozilla/firefox",
                # Snap and Flatpak packages sandbox the profile directory
                "snap/firefox/common/.mozilla/firefox",
                ".var/app/org.mozilla.firefox/.mozilla/firefox",
            ],
        },
        "preferred_profiles": [".default-release", ".default"],
    },
    "firefox_esr": {
        "display_name": "Firefox ESR",
        # ESR shares profile roots with regular Firefox; only the profile
        # naming differs (*.default-esr).
        "profile_roots": {
            "win32": ["AppData/Roaming/Mozilla/Firefox/Profiles"],
            "darwin": ["Library/Application Support/Firefox/Profiles"],
            "linux": [".mozilla/firefox"],
        },
        "preferred_profiles": [".default-esr", ".default"],
    },
    "tor": {
        "display_name": "Tor Browser",
        "profile_roots": {
            "win32": [
                "Desktop/Tor Browser/Browser/TorBrowser/Data/Browser",
                "Downloads/Tor Browser/Browser/TorBrowser/Data/Browser",
                "AppData/Local/Tor Browser/Browser/TorBrowser/Data/Browser",
            ],
            "darwin": ["Library/Application Support/TorBrowser-Data/Browser"],
            "linux": [
                "tor-browser*/Browser/TorBrowser/Data/Browser",
                ".local/share/torbrowser/tbb/*/tor-browser/Browser/TorBrowser/Data/Browser",
            ],
        },
        "preferred_profiles": ["profile.default"],
    },
    "librewolf": {
        "display_name": "LibreWolf",
        "profile_roots": {
            "win32": ["AppData/Roaming/librewolf/Profiles"],
            "darwin": ["Library/Application Support/librewolf/Profiles"],
            "linux": [
                ".librewolf",
                ".var/app/io.gitlab.librewolf-community/.librewolf",
            ],
        },
        "preferred_profiles": [".default-default", ".default"],
    },
    "waterfox": {
        "display_name": "Waterfox",
        "profile_roots": {
            "win32": ["AppData/Roaming/Waterfox/Profiles"],
            "darwin": ["Library/Application Support/Waterfox/Profiles"],
            "linux": [".waterfox"],
        },
        "preferred_profiles": [".default-release", ".default"],
    },
}


def _platform_key(platform: str) -> str:
    if platform.startswith("win"):
        return "win32"
    if platform == "darwin":
        return "darwin"
    return "linux"


def get_profile_roots(browser: str, platform: str) -> List[str]:
    """
    Get profile root patterns for a browser on a platform.

    Raises:
        ValueError: If browser is unknown
    """
    if browser not in HISTORY_STORE_PATTERNS:
        raise ValueError(f"Unknown browser: {browser}")
    roots = HISTORY_STORE_PATTERNS[browser]["profile_roots"]
    return list(roots.get(_platform_key(platform), []))


def get_preferred_profiles(browser: str) -> List[str]:
    """Profile directory suffixes ranked best-first for a browser."""
    if browser not in HISTORY_STORE_PATTERNS:
        raise ValueError(f"Unknown browser: {browser}")
    return list(HISTORY_STORE_PATTERNS[browser]["preferred_profiles"])


def get_browser_display_name(browser: str) -> str:
    """Get human-readable browser name."""
    if browser in HISTORY_STORE_PATTERNS:
        return HISTORY_STORE_PATTERNS[browser]["display_name"]
    return browser.replace("_", " ").title()


def get_all_browsers() -> List[str]:
    """Get list of all supported browser keys."""
    return list(HISTORY_STORE_PATTERNS.keys())
