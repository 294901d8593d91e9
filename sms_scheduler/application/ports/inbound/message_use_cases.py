from abc import ABC, abstractmethod
from uuid import UUID

from ...dtos import (
    MessageListResponseDTO,
    MessageResponseDTO,
    ScheduleMessageDTO,
    UpdateMessageDTO,
)


class ScheduleMessageUseCase(ABC):
    """Input port for scheduling a message."""

    @abstractmethod
    async def execute(self, dto: ScheduleMessageDTO) -> MessageResponseDTO:
        """Schedule a message for future delivery."""
        ...


class ListMessagesUseCase(ABC):
    """Input port for listing all messages."""

    @abstractmethod
    async def execute(self) -> MessageListResponseDTO: ...


class GetMessageUseCase(ABC):
    """Input port for retrieving message details."""

    @abstractmethod
    async def execute(self, message_id: UUID) -> MessageResponseDTO: ...


class UpdateMessageUseCase(ABC):
    """Input port for editing a pending message."""

    @abstractmethod
    async def execute(self, message_id: UUID, dto: UpdateMessageDTO) -> MessageResponseDTO: ...


class DeleteMessageUseCase(ABC):
    """Input port for deleting a message in any status."""

    @abstractmethod
    async def execute(self, message_id: UUID) -> None: ...
