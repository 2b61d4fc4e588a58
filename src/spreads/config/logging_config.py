"""Logging setup for the API process."""

import logging
import sys
from typing import Optional

from spreads.config.settings import Settings, get_settings

# Library loggers that are chatty below these levels
LIBRARY_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "yfinance": logging.WARNING,
    "peewee": logging.WARNING,
    "uvicorn": logging.INFO,
}


def resolve_level(name: str) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging to stdout and quiet library loggers."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=resolve_level(settings.log_level),
        format=settings.log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name, level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
