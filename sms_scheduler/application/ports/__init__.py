from .inbound import (
    DeleteMessageUseCase,
    DispatchMessageUseCase,
    GetMessageUseCase,
    ListMessagesUseCase,
    ReconcileDeliveryStatusUseCase,
    ScheduleMessageUseCase,
    UpdateMessageUseCase,
)
from .outbound import DeliveryBackend, DeliveryClient, MessageRepository, RateGate

__all__ = [
    "DeleteMessageUseCase",
    "DeliveryBackend",
    "DeliveryClient",
    "DispatchMessageUseCase",
    "GetMessageUseCase",
    "ListMessagesUseCase",
    "MessageRepository",
    "RateGate",
    "ReconcileDeliveryStatusUseCase",
    "ScheduleMessageUseCase",
    "UpdateMessageUseCase",
]
