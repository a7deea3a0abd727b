"""Logging bootstrap for the pairing client."""
from __future__ import annotations

from logging.config import dictConfig


def configure_logging(level: str = "INFO") -> None:
    """Route every logger to a single console handler at ``level``."""

    level = level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {"level": level, "handlers": ["console"]},
            "loggers": {
                # httpx logs every request at INFO, including the full URL.
                "httpx": {"level": "WARNING"},
            },
        }
    )


__all__ = ["configure_logging"]
