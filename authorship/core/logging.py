"""Structured logging configuration — structlog + stdlib logging.

Engine events (``blame.timeout``, ``pipeline.completed``, ...) are emitted
through structlog; infrastructure modules log through stdlib ``logging``.
Both end up in one handler with the same renderer. Logs go to stderr so
``authorship run --json`` keeps stdout machine-readable.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from typing import IO

import structlog

_FORMATS = ("console", "json")

# Third-party loggers that are noisy at INFO.
_QUIET = ("sqlalchemy.engine", "asyncpg", "aiosqlite", "asyncio")


def _level(raw: str) -> str:
    name = raw.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {raw!r}")
    return name


def _shared_processors(log_format: str) -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        # JSON keeps tracebacks structured; the console renderer pretty-prints them itself.
        structlog.processors.dict_tracebacks
        if log_format == "json"
        else structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables when *level* / *fmt* are not given:
        AUTHORSHIP_LOG_LEVEL  — engine log level (default: INFO)
        AUTHORSHIP_LOG_FORMAT — console | json (default: console)

    Raises ``ValueError`` for an unknown level or format.
    """
    log_level = _level(level or os.environ.get("AUTHORSHIP_LOG_LEVEL", "INFO"))
    log_format = (fmt or os.environ.get("AUTHORSHIP_LOG_FORMAT", "console")).lower()
    if log_format not in _FORMATS:
        raise ValueError(f"unknown log format: {log_format!r} (expected one of {_FORMATS})")

    shared = _shared_processors(log_format)
    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": stream or sys.stderr,
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": "WARNING"},
            "loggers": {
                "authorship": {"level": log_level},
                **{name: {"level": "WARNING"} for name in _QUIET},
            },
        }
    )
