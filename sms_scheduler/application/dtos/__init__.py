from .message_dto import (
    DeliveryStatusCallbackDTO,
    MessageListResponseDTO,
    MessageResponseDTO,
    ReconciliationResultDTO,
    ScheduleMessageDTO,
    UpdateMessageDTO,
)

__all__ = [
    "DeliveryStatusCallbackDTO",
    "MessageListResponseDTO",
    "MessageResponseDTO",
    "ReconciliationResultDTO",
    "ScheduleMessageDTO",
    "UpdateMessageDTO",
]
