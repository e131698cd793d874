"""
Logging setup - one console handler, level from settings.

Modules log through `logging.getLogger(__name__)`.
"""

import logging
from logging.config import dictConfig

from app.core.config import get_settings


def configure_logging(level: str = None) -> None:
    level = (level or get_settings().log_level).upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": level,
                }
            },
            "root": {"handlers": ["console"], "level": level},
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)
