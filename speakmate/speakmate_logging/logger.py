"""
Structured JSON logging: timestamp, event_type, call generation, transcript key.

structlog with ISO timestamps, log level, and consistent keys. Every module
should use get_logger() and log a snake_case event name plus keyword fields.
Logs go to stderr; stdout is reserved for command output.

Uses only Python stdlib logging and structlog; no other speakmate imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output by default (LOG_FORMAT=json); LOG_FORMAT=console for local runs
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601, UTC)."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _drop_none(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Omit fields whose value is None (unset language, no reason, ...)."""
    return {k: v for k, v in event_dict.items() if v is not None}


def configure_structlog() -> None:
    """Configure structlog once at import."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _drop_none,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("analyze_started", generation=3, url="https://api.example.com/analyze")
    Output (JSON): {"event_type": "analyze_started", "generation": 3, "url": "...",
    "timestamp": "...", "level": "info", "logger": "speakmate.session.manager"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_call(name: str, generation: int, transcript_key: str | None) -> structlog.BoundLogger:
    """Return a logger with the analyze call's generation and transcript key bound."""
    return get_logger(name).bind(generation=generation, transcript_key=transcript_key)
