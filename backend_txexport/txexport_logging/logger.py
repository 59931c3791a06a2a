"""
Structured logging for the export service.

Each line carries event_type, level, an ISO-8601 UTC timestamp, the module
name under "logger", and whatever context the call binds (wallet_id,
signature, attempt, delay_ms, error). LOG_FORMAT=json (default) renders one
JSON object per line; anything else uses structlog's console renderer.

Imports nothing from backend_txexport so every module can use it.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """(Re)configure structlog; level and fmt default to LOG_LEVEL and LOG_FORMAT."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    fmt = (fmt or os.getenv("LOG_FORMAT") or "json").strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.format_exc_info,
        structlog.processors.EventRenamer("event_type"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), event_key="event_type"))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a logger bound to the given module name.

        logger = get_logger(__name__)
        logger.warning("tx_fetch_retry", signature=sig, attempt=2, delay_ms=1000)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet_id: str) -> structlog.BoundLogger:
    """Logger with wallet_id attached, for everything logged during one export."""
    return get_logger("backend_txexport.exporter").bind(wallet_id=wallet_id)
