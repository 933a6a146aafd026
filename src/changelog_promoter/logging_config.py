"""Structured logging configuration.

Sets up structlog so that every module logs events as key/value pairs:
  {"event": "entry_extracted", "adapter": "git-chglog", "version": "v1.2.0"}

In development the output is pretty-printed; in production it is JSON so it
can be shipped to a log pipeline as-is.

Usage:
    from changelog_promoter.logging_config import setup_logging, get_logger

    setup_logging(environment="production")
    logger = get_logger(__name__)
    logger.info("entry_extracted", adapter="release-it", version="1.0.1")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog


def _renderer(environment: str) -> Any:
    if environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    environment: str | None = None,
    log_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for the CLI and the API.

    Args:
        environment: "development" or "production". Reads from
                     ENVIRONMENT env var if not provided.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
                   Reads from LOG_LEVEL env var if not provided.
                   DEBUG shows every external command that is run.
        stream: Where log lines go. Defaults to stderr, since stdout
                carries the CLI's prompt output.
    """
    env = environment or os.environ.get("ENVIRONMENT", "development")
    level = getattr(logging, (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper())
    out = stream or sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(env),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )

    # uvicorn and other stdlib loggers share the stream
    logging.basicConfig(format="%(message)s", stream=out, level=level)


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        A structlog bound logger
    """
    return structlog.get_logger(name)
