"""
Logging configuration for the InfoHub server and client shell.

Applies a single stream handler to the root logger and routes uvicorn's
loggers through it so request logs and upstream failures share one format.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from app.config import Settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(settings: Settings) -> None:
    """Apply the logging configuration for the given settings."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": _LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            }
        },
        "loggers": {
            "": {"handlers": ["default"], "level": level},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
            # httpx INFO request lines include the appid query parameter
            "httpx": {"level": logging.WARNING},
        },
    }
    logging.config.dictConfig(config)
