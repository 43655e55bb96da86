"""
Core Logging Module

Stdout logging with the request trace id on every line.

The trace id lives in a ContextVar: the HTTP middleware sets it per request
and it follows the request through async handlers, the store client (which
forwards it as x-request-id) and the algorithms.

Usage:
    from clinic_service.core.logging import setup_logging, set_trace_id

    setup_logging()
    set_trace_id("abc123")
    logging.getLogger(__name__).info("Generating slots")
    # 2026-02-02 09:00:00 [INFO] [abc123] clinic_service.api.slots: Generating slots
"""

import logging
import sys
from contextvars import ContextVar
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(trace_id)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# "-" means no request is being handled
TRACE_ID: ContextVar[str] = ContextVar("trace_id", default="-")

_configured = False


def set_trace_id(trace_id: str) -> None:
    TRACE_ID.set(trace_id)


def get_trace_id() -> str:
    """Trace id of the current context, or "-" outside a request."""
    return TRACE_ID.get()


class TraceIdFilter(logging.Filter):
    """Adds `trace_id` to every record so LOG_FORMAT can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def setup_logging(log_level: Optional[str] = None, force: bool = False) -> None:
    """
    Configure the root logger once.

    Args:
        log_level: Level name; defaults to settings.LOG_LEVEL
        force: Drop existing root handlers and configure again
    """
    global _configured

    if _configured and not force:
        return

    if log_level is None:
        from clinic_service.core.config import settings
        log_level = settings.LOG_LEVEL

    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    if force:
        root.handlers.clear()

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        handler.addFilter(TraceIdFilter())
        root.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).info(f"Logging configured with level: {logging.getLevelName(level)}")


def reset_logging() -> None:
    """Forget that logging was configured (handlers are left in place)."""
    global _configured
    _configured = False


def get_logger(name: str) -> logging.Logger:
    """logging.getLogger(name), configuring logging first if needed."""
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
