from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    max_mb: int = 5
    backup_count: int = 3

    @property
    def level_value(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass(slots=True)
class SearchConfig:
    """History search configuration from config.yml."""

    # Additional directories scanned for */places.sqlite (portable installs)
    extra_profile_roots: List[Path] = field(default_factory=list)


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    base_dir: Path
    logs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    def to_json(self) -> str:
        """Serialize the configuration into a JSON string for diagnostics."""
        data = {
            "logs_dir": str(self.logs_dir),
            "logging": {
                "level": self.logging.level,
                "max_mb": self.logging.max_mb,
                "backup_count": self.logging.backup_count,
            },
            "search": {
                "extra_profile_roots": [str(p) for p in self.search.extra_profile_roots],
            },
        }
        return json.dumps(data, indent=2, sort_keys=True)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return content


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_yaml = base_dir / "config" / "config.yml"
    config_overrides = _load_yaml(config_yaml)

    # Logs must go to a persistent, writable location, not the ephemeral
    # _MEIPASS temp directory used by PyInstaller.
    if getattr(sys, 'frozen', False):
        logs_dir = Path.home() / ".config" / "surfseek" / "logs"
    else:
        logs_dir = base_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    logging_cfg = config_overrides.get("logging") or {}
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", "INFO")),
        max_mb=int(logging_cfg.get("max_mb", 5)),
        backup_count=int(logging_cfg.get("backup_count", 3)),
    )

    search_cfg = config_overrides.get("search") or {}
    search_config = SearchConfig(
        extra_profile_roots=[
            Path(p).expanduser() for p in search_cfg.get("extra_profile_roots", []) or []
        ],
    )

    return AppConfig(
        base_dir=base_dir,
        logs_dir=logs_dir,
        logging=logging_config,
        search=search_config,
    )
