from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from ..exceptions import InvalidStateError, ValidationError
from ..value_objects import MessageBody, ensure_future


class MessageStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    # Reported by the provider through delivery-status callbacks
    QUEUED = "queued"
    SENDING = "sending"
    DELIVERED = "delivered"
    UNDELIVERED = "undelivered"


def normalize_status(status: str) -> str:
    """Canonical form of a status string (provider statuses are free-form)."""
    value = status.value if isinstance(status, MessageStatus) else status
    normalized = value.strip().lower()
    if not normalized:
        raise ValidationError("Status cannot be empty")
    return normalized


@dataclass
class ScheduledMessage:
    """
    A message waiting for, or done with, delivery.

    ``status`` is a plain string: the dispatch path only ever writes the
    ``MessageStatus`` values, but delivery callbacks may set any status the
    provider reports.
    """

    id: UUID
    recipient: str
    body: MessageBody
    scheduled_at: datetime
    status: str
    created_at: datetime
    updated_at: datetime
    provider_ref: str | None = None
    failure_reason: str | None = None
    attempts: int = 0

    @classmethod
    def create(
        cls,
        recipient: str,
        body: MessageBody,
        scheduled_at: datetime,
        now: datetime,
    ) -> "ScheduledMessage":
        """Factory method to create a new pending message."""
        _ensure_recipient(recipient)
        ensure_future(scheduled_at, now)
        return cls(
            id=uuid4(),
            recipient=recipient,
            body=body,
            scheduled_at=scheduled_at,
            status=MessageStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == MessageStatus.PENDING.value

    def reschedule(
        self,
        recipient: str,
        body: MessageBody,
        scheduled_at: datetime,
        now: datetime,
    ) -> None:
        """Replace the editable fields. Only pending messages may be edited."""
        self.require_pending()
        _ensure_recipient(recipient)
        ensure_future(scheduled_at, now)
        self.recipient = recipient
        self.body = body
        self.scheduled_at = scheduled_at
        self.updated_at = now

    def mark_sent(self, provider_ref: str, attempts: int, now: datetime) -> None:
        self.require_pending()
        self.status = MessageStatus.SENT.value
        self.provider_ref = provider_ref
        self.failure_reason = None
        self.attempts = attempts
        self.updated_at = now

    def mark_failed(self, reason: str, attempts: int, now: datetime) -> None:
        self.require_pending()
        self.status = MessageStatus.FAILED.value
        self.failure_reason = reason
        self.attempts = attempts
        self.updated_at = now

    def require_pending(self) -> None:
        """Raise InvalidStateError unless the message can still be edited or sent."""
        if not self.is_pending:
            raise InvalidStateError(self.id, self.status)


def _ensure_recipient(recipient: str) -> None:
    if not recipient or not recipient.strip():
        raise ValidationError("Recipient cannot be empty")
