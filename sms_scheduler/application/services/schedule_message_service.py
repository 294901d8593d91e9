import structlog

from ...domain.clock import Clock, utc_now
from ...domain.entities import ScheduledMessage
from ...domain.value_objects import MessageBody, parse_schedule_time
from ..dtos import MessageResponseDTO, ScheduleMessageDTO
from ..ports.inbound import ScheduleMessageUseCase
from ..ports.outbound import MessageRepository

logger = structlog.get_logger()


class ScheduleMessageService(ScheduleMessageUseCase):
    """Service implementing the schedule message use case."""

    def __init__(self, repository: MessageRepository, clock: Clock = utc_now) -> None:
        self._repository = repository
        self._clock = clock

    async def execute(self, dto: ScheduleMessageDTO) -> MessageResponseDTO:
        """Validate and persist a new pending message."""
        message = ScheduledMessage.create(
            recipient=dto.recipient,
            body=MessageBody(dto.body),
            scheduled_at=parse_schedule_time(dto.scheduled_at),
            now=self._clock(),
        )

        await self._repository.create(message)

        logger.info(
            "Message scheduled",
            message_id=str(message.id),
            scheduled_at=message.scheduled_at.isoformat(),
        )
        return MessageResponseDTO.from_entity(message)
