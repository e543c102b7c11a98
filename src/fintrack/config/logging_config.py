"""Logging configuration."""

import logging
import sys

from fintrack.config.settings import get_settings

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "yfinance": logging.WARNING,
    "uvicorn": logging.INFO,
}


def setup_logging() -> None:
    """Configure application logging from settings. Safe to call more than once."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
