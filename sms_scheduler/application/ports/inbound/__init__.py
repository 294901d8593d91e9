from .delivery_use_cases import DispatchMessageUseCase, ReconcileDeliveryStatusUseCase
from .message_use_cases import (
    DeleteMessageUseCase,
    GetMessageUseCase,
    ListMessagesUseCase,
    ScheduleMessageUseCase,
    UpdateMessageUseCase,
)

__all__ = [
    "DeleteMessageUseCase",
    "DispatchMessageUseCase",
    "GetMessageUseCase",
    "ListMessagesUseCase",
    "ReconcileDeliveryStatusUseCase",
    "ScheduleMessageUseCase",
    "UpdateMessageUseCase",
]
