"""Message DTOs.

Recipient format is checked here, at the boundary. The domain only requires
a non-empty recipient.
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ...domain.entities import ScheduledMessage
from ...domain.value_objects import MAX_BODY_LENGTH

PHONE_NUMBER_PATTERN = r"^\+?[1-9]\d{1,14}$"


class ScheduleMessageDTO(BaseModel):
    """DTO for scheduling a new message.

    ``scheduled_at`` stays a string so that unparseable or offset-less values
    surface as the service's own ValidationError rather than a schema error.
    """

    recipient: str = Field(..., min_length=1, max_length=32)
    body: str = Field(..., min_length=1, max_length=MAX_BODY_LENGTH)
    scheduled_at: str = Field(..., min_length=1)

    @field_validator("recipient", "body", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("recipient", mode="after")
    @classmethod
    def check_phone_number(cls, v: str) -> str:
        if not re.fullmatch(PHONE_NUMBER_PATTERN, v):
            raise ValueError("Please enter a valid phone number")
        return v


class UpdateMessageDTO(ScheduleMessageDTO):
    """DTO for editing a pending message. All editable fields are replaced."""


class MessageResponseDTO(BaseModel):
    """DTO for message response."""

    id: UUID
    recipient: str
    body: str
    scheduled_at: datetime
    status: str
    created_at: datetime
    updated_at: datetime
    provider_ref: str | None = None
    failure_reason: str | None = None
    attempts: int = 0

    @classmethod
    def from_entity(cls, message: ScheduledMessage) -> "MessageResponseDTO":
        return cls(
            id=message.id,
            recipient=message.recipient,
            body=message.body.text,
            scheduled_at=message.scheduled_at,
            status=message.status,
            created_at=message.created_at,
            updated_at=message.updated_at,
            provider_ref=message.provider_ref,
            failure_reason=message.failure_reason,
            attempts=message.attempts,
        )


class MessageListResponseDTO(BaseModel):
    """Messages ordered by scheduled time, latest first."""

    messages: list[MessageResponseDTO]


class DeliveryStatusCallbackDTO(BaseModel):
    """Normalized provider delivery-status callback."""

    status: str = Field(..., min_length=1)
    provider_ref: str | None = None
    recipient: str | None = None


class ReconciliationResultDTO(BaseModel):
    status: str
    updated: int
