from __future__ import annotations

import logging
import sys
import time
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "surfseek.log"
LOGGER_NAMESPACE = "surfseek"

# Searches run on pool threads; the thread name tells them apart from the UI.
LOG_FORMAT = "%(asctime)sZ %(levelname)s [%(threadName)s] %(name)s %(message)s"


class UtcFormatter(logging.Formatter):
    """Formatter that renders timestamps in UTC using ISO-8601."""

    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="seconds")


def configure_logging(
    log_dir: Path,
    level: int = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
    console: Optional[bool] = None,
) -> Logger:
    """
    Attach a rotating log file (and a console stream) to the surfseek logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        log_dir: Directory for surfseek.log, created if missing
        level: Level of the surfseek logger
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept next to the live one
        console: Also log to stderr; None means only when stderr exists
            (it does not for a windowed launcher on Windows)
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME
    if console is None:
        console = sys.stderr is not None

    formatter = UtcFormatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    app_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        app_logger.addHandler(console_handler)

    app_logger.debug(
        "Logging to %s (rotate at %d KiB, keep %d)",
        log_path, max_bytes // 1024, backup_count,
    )
    return app_logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return a child logger under the application namespace."""
    base = logging.getLogger(LOGGER_NAMESPACE)
    if name:
        return base.getChild(name)
    return base
