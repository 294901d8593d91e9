from .delivery_backend import DeliveryBackend, DeliveryResult
from .delivery_client import (
    Delivered,
    DeliveryClient,
    DeliveryFailure,
    DeliveryOutcome,
    RateGate,
)
from .message_repository import MessageRepository

__all__ = [
    "Delivered",
    "DeliveryBackend",
    "DeliveryClient",
    "DeliveryFailure",
    "DeliveryOutcome",
    "DeliveryResult",
    "MessageRepository",
    "RateGate",
]
