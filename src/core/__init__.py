"""Ambient infrastructure shared by the search engine and the launcher UI."""

from .config import AppConfig, load_app_config  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
