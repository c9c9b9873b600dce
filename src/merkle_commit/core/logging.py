"""
merkle-commit - Logging Configuration

The library only emits events through structlog; applications embedding it
call setup_logging() once at startup if they want this rendering.
"""

import logging
import sys
from typing import TextIO

import structlog

from merkle_commit.core.config import Settings, settings as default_settings


def setup_logging(config: Settings | None = None, stream: TextIO | None = None) -> None:
    """
    Configure structured logging.

    Events below LOG_LEVEL are dropped before any processor runs. Production
    renders JSON lines; other environments render for the console, coloured
    only when the stream is a terminal.
    """
    config = config or default_settings
    stream = stream or sys.stdout
    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.LOG_LEVEL!r}")

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if config.ENV == "production":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
