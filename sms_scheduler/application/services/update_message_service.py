from uuid import UUID

import structlog

from ...domain.clock import Clock, utc_now
from ...domain.entities import MessageStatus
from ...domain.value_objects import MessageBody, parse_schedule_time
from ..dtos import MessageResponseDTO, UpdateMessageDTO
from ..ports.inbound import UpdateMessageUseCase
from ..ports.outbound import MessageRepository

logger = structlog.get_logger()


class UpdateMessageService(UpdateMessageUseCase):
    """
    Service implementing the edit message use case.

    The stored status is re-checked inside the write, so a dispatch that
    completes between the read and the write still yields InvalidStateError.
    """

    def __init__(self, repository: MessageRepository, clock: Clock = utc_now) -> None:
        self._repository = repository
        self._clock = clock

    async def execute(self, message_id: UUID, dto: UpdateMessageDTO) -> MessageResponseDTO:
        message = await self._repository.get(message_id)
        message.require_pending()

        scheduled_at = parse_schedule_time(dto.scheduled_at)
        message.reschedule(
            recipient=dto.recipient,
            body=MessageBody(dto.body),
            scheduled_at=scheduled_at,
            now=self._clock(),
        )
        await self._repository.update(message, expected_status=MessageStatus.PENDING.value)

        logger.info(
            "Message updated",
            message_id=str(message_id),
            scheduled_at=scheduled_at.isoformat(),
        )
        return MessageResponseDTO.from_entity(message)
