from datetime import UTC, datetime
from typing import overload
from uuid import UUID

from sqlalchemy import DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...domain.entities import ScheduledMessage
from ...domain.value_objects import MessageBody


def _naive_utc(dt: datetime | None) -> datetime | None:
    """Convert to UTC and strip timezone info for TIMESTAMP WITHOUT TIME ZONE columns."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return dt.replace(tzinfo=None)


@overload
def _aware_utc(dt: datetime) -> datetime: ...


@overload
def _aware_utc(dt: None) -> None: ...


def _aware_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC timezone to naive datetimes read from the database."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    pass


class ScheduledMessageModel(Base):
    """SQLAlchemy model for the ScheduledMessage entity."""

    __tablename__ = "scheduled_messages"
    __table_args__ = (
        # Supports the due-set query
        Index("ix_scheduled_messages_status_scheduled_at", "status", "scheduled_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    recipient: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    provider_ref: Mapped[str | None] = mapped_column(String(64), index=True)
    failure_reason: Mapped[str | None] = mapped_column(Text)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @classmethod
    def from_entity(cls, message: ScheduledMessage) -> "ScheduledMessageModel":
        """Convert domain entity to ORM model."""
        return cls(id=message.id, **column_values(message))

    def to_entity(self) -> ScheduledMessage:
        """Convert ORM model to domain entity."""
        return ScheduledMessage(
            id=self.id,
            recipient=self.recipient,
            body=MessageBody(text=self.body),
            scheduled_at=_aware_utc(self.scheduled_at),
            status=self.status,
            created_at=_aware_utc(self.created_at),
            updated_at=_aware_utc(self.updated_at),
            provider_ref=self.provider_ref,
            failure_reason=self.failure_reason,
            attempts=self.attempts,
        )


def column_values(message: ScheduledMessage) -> dict:
    """Column values of an entity, excluding the primary key."""
    return {
        "recipient": message.recipient,
        "body": message.body.text,
        "scheduled_at": _naive_utc(message.scheduled_at),
        "status": message.status,
        "provider_ref": message.provider_ref,
        "failure_reason": message.failure_reason,
        "attempts": message.attempts,
        "created_at": _naive_utc(message.created_at),
        "updated_at": _naive_utc(message.updated_at),
    }
