"""
Structured logging on top of structlog.

Events go to stderr so `--json` output on stdout stays machine-readable.
Call :func:`configure_logging` once from the entry point; modules only use
:func:`get_logger`:

    logger = get_logger(__name__)
    logger.info("analysis_completed", analysis_type="quick", ai_probability=42.5)
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional

import structlog

from plume_cli.config import Settings, get_settings


def _rename_event(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Expose structlog's 'event' key as 'event_type'."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolved per call: the CLI and tests swap sys.stderr after import
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.WARNING)

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(_rename_event)
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging(Settings())


def get_logger(name: str):
    # Lazy proxy: module-level loggers follow later configure_logging calls
    return structlog.get_logger(logger_name=name)
