from uuid import UUID

from ..dtos import MessageListResponseDTO, MessageResponseDTO
from ..ports.inbound import GetMessageUseCase, ListMessagesUseCase
from ..ports.outbound import MessageRepository


class ListMessagesService(ListMessagesUseCase):
    """Service implementing the list messages use case."""

    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    async def execute(self) -> MessageListResponseDTO:
        messages = await self._repository.list()
        return MessageListResponseDTO(
            messages=[MessageResponseDTO.from_entity(m) for m in messages]
        )


class GetMessageService(GetMessageUseCase):
    """Service implementing the get message use case."""

    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    async def execute(self, message_id: UUID) -> MessageResponseDTO:
        message = await self._repository.get(message_id)
        return MessageResponseDTO.from_entity(message)
