"""
Application service for dispatching one due message.

Gates the send on the rate limiter, delegates delivery (with retries) to the
DeliveryClient port and writes the terminal result back to the store. A
message that fails every attempt is recorded as failed and never picked up
again.
"""

import structlog

from ...domain.clock import Clock, utc_now
from ...domain.entities import MessageStatus, ScheduledMessage
from ...domain.exceptions import InvalidStateError, MessageNotFoundError
from ..ports.inbound import DispatchMessageUseCase
from ..ports.outbound import (
    Delivered,
    DeliveryClient,
    DeliveryFailure,
    MessageRepository,
    RateGate,
)

logger = structlog.get_logger()


class DispatchMessageService(DispatchMessageUseCase):
    """
    Delivers a due message and records the outcome.

    Callers must hand messages over one at a time: the rate gate is the single
    point of control for send spacing.
    """

    def __init__(
        self,
        repository: MessageRepository,
        delivery_client: DeliveryClient,
        rate_gate: RateGate,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._delivery_client = delivery_client
        self._rate_gate = rate_gate
        self._clock = clock

    async def execute(self, message: ScheduledMessage) -> str | None:
        """
        Send ``message`` and persist its new status.

        Returns:
            The status written back, or None when the message was deleted or
            changed state while the send was in flight

        Raises:
            StoreError: If the result could not be written back
        """
        await self._rate_gate.wait()

        outcome = await self._delivery_client.send(message.recipient, message.body.text)
        now = self._clock()

        match outcome:
            case Delivered(provider_ref=provider_ref, attempts=attempts):
                message.mark_sent(provider_ref, attempts, now)
            case DeliveryFailure(reason=reason, attempts=attempts):
                message.mark_failed(reason, attempts, now)

        try:
            await self._repository.record_dispatch(message)
        except MessageNotFoundError:
            logger.warning(
                "Message deleted during dispatch, result discarded",
                message_id=str(message.id),
                result=message.status,
            )
            return None
        except InvalidStateError as e:
            logger.warning(
                "Message changed state during dispatch, result discarded",
                message_id=str(message.id),
                result=message.status,
                current_status=e.status,
            )
            return None

        if message.status == MessageStatus.SENT.value:
            logger.info(
                "Message sent",
                message_id=str(message.id),
                provider_ref=message.provider_ref,
                attempts=message.attempts,
            )
        else:
            logger.error(
                "Message delivery failed",
                message_id=str(message.id),
                attempts=message.attempts,
                error=message.failure_reason,
            )
        return message.status
