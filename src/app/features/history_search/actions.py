"""
Open history entries and free-text searches in the configured browser.

Launching is fire-and-forget: the launcher never waits for the browser
process. Failures are logged and reported as False.
"""
from __future__ import annotations

import subprocess
import sys
from typing import List, Optional
from urllib.parse import quote_plus

from app.config.settings import DEFAULT_SEARCH_ENGINE, SEARCH_ENGINES, SearchSettings
from core.logging import get_logger

logger = get_logger("app.features.history_search.actions")


def build_search_url(query: str, engine: str = DEFAULT_SEARCH_ENGINE) -> str:
    """Search URL for query on engine (unknown engines use the default)."""
    prefix = SEARCH_ENGINES.get(engine, SEARCH_ENGINES[DEFAULT_SEARCH_ENGINE])
    return f"{prefix}{quote_plus(query)}"


def browser_command(browser_app: str, url: Optional[str] = None, platform: str = sys.platform) -> List[str]:
    """
    Argument list that opens url (or just the browser) with browser_app.

    Arguments are never joined into a shell string, and no shell sits between
    the launcher and the browser. On Windows browser_app must be on PATH or
    an absolute path to the executable.
    """
    if platform == "darwin":
        cmd = ["open", "-a", browser_app]
    else:
        cmd = [browser_app]
    if url:
        cmd.append(url)
    return cmd


def _launch(cmd: List[str]) -> bool:
    try:
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.error("Failed to launch browser %s: %s", cmd[0], e)
        return False
    return True


def open_history_entry(url: str, settings: SearchSettings) -> bool:
    """Open a history URL in the configured browser."""
    logger.info("Opening history entry: %s (browser=%s)", url[:100], settings.browser_app)
    return _launch(browser_command(settings.browser_app, url))


def open_new_tab(query: Optional[str], settings: SearchSettings) -> bool:
    """
    Open a new tab searching for query, or a blank window if query is empty.
    """
    text = (query or "").strip()
    url = build_search_url(text, settings.search_engine) if text else None
    logger.info("Opening new tab (query=%r, engine=%s)", text, settings.search_engine)
    return _launch(browser_command(settings.browser_app, url))
