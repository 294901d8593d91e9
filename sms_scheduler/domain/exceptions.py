"""
Error taxonomy for the scheduling service.

Request-path errors propagate to the caller unchanged. The background poll
path absorbs them into logs and message status. Delivery failure is not an
exception at all: it is recorded as ``status = failed`` on the message.
"""

from uuid import UUID


class SchedulerError(Exception):
    """Base class for all service errors."""


class ValidationError(SchedulerError, ValueError):
    """Input rejected before anything is persisted."""


class MessageNotFoundError(SchedulerError, LookupError):
    """The referenced message id does not exist."""

    def __init__(self, message_id: UUID) -> None:
        self.message_id = message_id
        super().__init__(f"Message {message_id} not found")


class InvalidStateError(SchedulerError):
    """A mutation was attempted on a message that is no longer pending."""

    def __init__(self, message_id: UUID, status: str) -> None:
        self.message_id = message_id
        self.status = status
        super().__init__(f"Cannot modify message {message_id} in {status} status")


class StoreError(SchedulerError):
    """The persistence layer is unavailable or rejected the operation."""
