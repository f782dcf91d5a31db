from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from core.app_version import get_app_version
from core.config import load_app_config
from core.logging import configure_logging, get_logger

from .config.settings import AppSettings, settings_path
from .features.history_search import HistorySearchController, HistorySearchWidget

LOGGER = get_logger("app.main")


def base_directory() -> Path:
    if getattr(sys, 'frozen', False):
        # Running in a PyInstaller bundle
        return Path(sys._MEIPASS)
    # Running from source
    return Path(__file__).resolve().parents[2]


def build_window(base_dir: Path) -> HistorySearchWidget:
    """Load configuration and preferences and wire the launcher window."""
    app_config = load_app_config(base_dir)
    configure_logging(
        app_config.logs_dir,
        level=app_config.logging.level_value,
        max_bytes=app_config.logging.max_mb * 1024 * 1024,
        backup_count=app_config.logging.backup_count,
    )
    settings = AppSettings.load(settings_path(base_dir))
    LOGGER.info(
        "SurfSeek %s starting (browser=%s)", get_app_version(), settings.search.browser
    )

    controller = HistorySearchController(
        settings.search,
        extra_roots=app_config.search.extra_profile_roots,
    )
    window = HistorySearchWidget(controller, settings.search)
    controller.setParent(window)
    window.resize(settings.general.window_width, settings.general.window_height)
    return window


def main() -> int:
    app = QApplication(sys.argv)
    window = build_window(base_directory())
    window.show()
    window.start()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
