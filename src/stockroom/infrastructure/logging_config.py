"""Logging configuration.

stdlib logging owns the handlers; structlog formats the events. JSON lines
in production and staging, a human-readable console renderer elsewhere.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from stockroom.infrastructure.config import Settings


def setup_stdlib_logging(settings: Settings) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(settings.log_level)
    root_logger.addHandler(handler)


def setup_structlog(settings: Settings) -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.env in ["production", "staging"]:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Settings) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(settings)
    setup_structlog(settings)


def add_context(**kwargs: Any) -> None:
    """Bind values that appear on every subsequent log event."""
    structlog.contextvars.bind_contextvars(**kwargs)
