"""
Outbound port for scheduled-message persistence.

Every operation is atomic for a single record. No operation spans records
transactionally.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from ....domain.entities import ScheduledMessage


class MessageRepository(ABC):
    """Output port for message persistence."""

    @abstractmethod
    async def create(self, message: ScheduledMessage) -> UUID:
        """Persist a new message and return its id."""
        ...

    @abstractmethod
    async def get(self, message_id: UUID) -> ScheduledMessage:
        """
        Retrieve a message by id.

        Raises:
            MessageNotFoundError: If no message has this id
        """
        ...

    @abstractmethod
    async def list(self) -> list[ScheduledMessage]:
        """All messages ordered by scheduled time, latest first."""
        ...

    @abstractmethod
    async def update(
        self,
        message: ScheduledMessage,
        expected_status: str | None = None,
    ) -> None:
        """
        Overwrite a stored message.

        Args:
            message: Message carrying the new field values
            expected_status: When given, the write only applies if the stored
                status still equals it

        Raises:
            MessageNotFoundError: If the message no longer exists
            InvalidStateError: If the stored status differs from expected_status
        """
        ...

    @abstractmethod
    async def record_dispatch(self, message: ScheduledMessage) -> None:
        """
        Store the outcome of a send attempt.

        Only status, provider_ref, failure_reason and attempts are written, and
        only while the stored message is still pending. Edits made to the
        recipient, body or schedule while the send was in flight are kept.

        Raises:
            MessageNotFoundError: If the message no longer exists
            InvalidStateError: If the stored message is no longer pending
        """
        ...

    @abstractmethod
    async def delete(self, message_id: UUID) -> bool:
        """Hard-delete a message. Returns False if it did not exist."""
        ...

    @abstractmethod
    async def find_due(self, now: datetime) -> list[ScheduledMessage]:
        """Pending messages with scheduled_at <= now, oldest first."""
        ...

    @abstractmethod
    async def apply_provider_status(
        self,
        status: str,
        *,
        provider_ref: str | None = None,
        recipient: str | None = None,
    ) -> int:
        """
        Set ``status`` on every message matching the correlation key.

        Rows already carrying the status are left untouched. Returns the
        number of rows changed.
        """
        ...
