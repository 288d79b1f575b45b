"""structlog setup shared by the command line tool and embedding services."""
from __future__ import annotations

import logging
import sys

import structlog

from .config import Settings, get_settings


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level)
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Settings | None = None) -> None:
    """Apply ``log_level`` and ``log_json`` from the configuration."""

    settings = settings or get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
