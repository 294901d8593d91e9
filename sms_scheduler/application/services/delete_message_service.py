from uuid import UUID

import structlog

from ...domain.exceptions import MessageNotFoundError
from ..ports.inbound import DeleteMessageUseCase
from ..ports.outbound import MessageRepository

logger = structlog.get_logger()


class DeleteMessageService(DeleteMessageUseCase):
    """Hard-deletes a message regardless of its status."""

    def __init__(self, repository: MessageRepository) -> None:
        self._repository = repository

    async def execute(self, message_id: UUID) -> None:
        if not await self._repository.delete(message_id):
            raise MessageNotFoundError(message_id)
        logger.info("Message deleted", message_id=str(message_id))
