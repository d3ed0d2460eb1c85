"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any

import structlog


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    log_file: Path | str | None = None,
) -> None:
    """Configure structlog and stdlib logging.

    Arguments override environment variables:
        LICENSE_FETCHER_LOG_LEVEL  — log level (default: INFO)
        LICENSE_FETCHER_LOG_FORMAT — console | json (default: console)

    If *log_file* is given, warnings and errors (failed lookups, skipped
    manifests) are also written there as JSON lines.
    """
    log_level = (level or os.environ.get("LICENSE_FETCHER_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("LICENSE_FETCHER_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    # --- structlog configure ---
    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatters: dict[str, Any] = {
        "structlog": {
            "()": structlog.stdlib.ProcessorFormatter,
            "foreign_pre_chain": shared_processors,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        },
    }
    # Report output may go to stdout, so logs stay on stderr.
    handlers: dict[str, Any] = {
        "default": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "structlog",
        },
    }

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        formatters["structlog_json"] = {
            "()": structlog.stdlib.ProcessorFormatter,
            "foreign_pre_chain": shared_processors,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        }
        handlers["errors_file"] = {
            "class": "logging.FileHandler",
            "filename": str(path),
            "mode": "w",
            "encoding": "utf-8",
            "level": "WARNING",
            "formatter": "structlog_json",
        }

    # --- stdlib logging configure ---
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": handlers,
            "root": {
                "handlers": list(handlers),
                "level": log_level,
            },
            "loggers": {
                "license_fetcher": {"level": log_level},
                "httpx": {"level": "WARNING"},
                "httpcore": {"level": "WARNING"},
            },
        }
    )
