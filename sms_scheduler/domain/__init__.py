from .clock import Clock, utc_now
from .exceptions import (
    InvalidStateError,
    MessageNotFoundError,
    SchedulerError,
    StoreError,
    ValidationError,
)

__all__ = [
    "Clock",
    "InvalidStateError",
    "MessageNotFoundError",
    "SchedulerError",
    "StoreError",
    "ValidationError",
    "utc_now",
]
