"""
Structured logging configuration.

Centralized logging setup with:
- Structured JSON output
- Correlation ID tracking for HTTP requests
- Tick ID tracking for the poll loop
- Timing helper
- Phone number masking
"""

import logging
import sys
import time
from contextvars import ContextVar
from uuid import uuid4

import structlog

# Context variables for request and poll-tick correlation
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
tick_id: ContextVar[str] = ContextVar("tick_id", default="")


def configure_logging(service_name: str, level: int = logging.INFO) -> None:
    """
    Configure structured logging for the service.

    Args:
        service_name: Name of the service for log context
        level: Minimum stdlib log level
    """
    # structlog.stdlib.LoggerFactory wraps stdlib logging, so it needs a handler
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            _add_correlation_ids,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    """Processor to add service name to all logs."""

    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def _add_correlation_ids(logger, method_name, event_dict):
    """Processor to add correlation and tick IDs if present."""
    cid = correlation_id.get()
    if cid:
        event_dict.setdefault("correlation_id", cid)
    tid = tick_id.get()
    if tid:
        event_dict.setdefault("tick_id", tid)
    return event_dict


def set_correlation_id(cid: str) -> None:
    correlation_id.set(cid)


def new_tick_id() -> str:
    """Start a new poll tick context and return its ID."""
    tid = uuid4().hex[:12]
    tick_id.set(tid)
    return tid


class Timer:
    """
    Context manager for timing operations.

    Usage:
        with Timer() as t:
            await expensive_operation()
        logger.info("Operation completed", duration_ms=t.duration_ms)
    """

    def __init__(self):
        self._start: float = 0
        self._end: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds, rounded to 2 decimal places."""
        return round((self._end - self._start) * 1000, 2)


def mask_phone_number(value: str | None, visible_digits: int = 4) -> str:
    """
    Mask a phone number for logging, keeping only the trailing digits.

    Args:
        value: The phone number
        visible_digits: Number of trailing characters to keep

    Returns:
        Masked value, e.g. ``*******7890``
    """
    if not value:
        return ""
    if len(value) <= visible_digits:
        return "*" * len(value)
    return "*" * (len(value) - visible_digits) + value[-visible_digits:]
