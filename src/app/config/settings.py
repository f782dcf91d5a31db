from __future__ import annotations

import json
import shutil
import sys
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

from core.enums import Browser

# Query URL prefixes; the percent-encoded search text is appended
SEARCH_ENGINES: Dict[str, str] = {
    "google": "https://www.google.com/search?q=",
    "duckduckgo": "https://duckduckgo.com/?q=",
    "bing": "https://www.bing.com/search?q=",
    "startpage": "https://www.startpage.com/do/search?q=",
    "brave": "https://search.brave.com/search?q=",
}

DEFAULT_SEARCH_ENGINE = "google"

_T = TypeVar("_T")


@dataclass
class SearchSettings:
    """Launcher preferences consumed by the history search."""

    # Which browser's history store to search
    browser: str = Browser.FIREFOX.value

    # Executable / application used to open URLs
    browser_app: str = "firefox"

    # Engine used when opening a new tab for free text
    search_engine: str = DEFAULT_SEARCH_ENGINE

    # Explicit places.sqlite path (skips profile discovery when set)
    places_path: str = ""

    def __post_init__(self) -> None:
        if self.browser not in {b.value for b in Browser}:
            self.browser = Browser.FIREFOX.value
        if self.search_engine not in SEARCH_ENGINES:
            self.search_engine = DEFAULT_SEARCH_ENGINE
        self.browser_app = self.browser_app.strip() or "firefox"
        self.places_path = self.places_path.strip()


@dataclass
class GeneralSettings:
    # Window geometry of the launcher
    window_width: int = 640
    window_height: int = 420


def _filtered(cls: Type[_T], data: Dict[str, Any]) -> _T:
    # Filter unknown keys to support loading settings written by other versions
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass
class AppSettings:
    general: GeneralSettings = field(default_factory=GeneralSettings)
    search: SearchSettings = field(default_factory=SearchSettings)

    @classmethod
    def load(cls, path: Path) -> "AppSettings":
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        general = _filtered(GeneralSettings, data.get("general", {}))
        search = _filtered(SearchSettings, data.get("search", {}))
        return cls(general=general, search=search)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, object] = {
            "general": asdict(self.general),
            "search": asdict(self.search),
        }
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def settings_path(base_dir: Path) -> Path:
    if getattr(sys, 'frozen', False):
        # Frozen binary: write settings to a persistent user config directory,
        # not the ephemeral _MEIPASS temp dir.
        config_dir = Path.home() / ".config" / "surfseek"
    else:
        config_dir = base_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    settings_file = config_dir / "settings.json"
    if not settings_file.exists():
        # Seed from shipped defaults template
        defaults_file = config_dir / "settings.defaults.json"
        if defaults_file.exists():
            shutil.copy2(defaults_file, settings_file)
    return settings_file
