"""
Application service for provider delivery-status callbacks.

Callbacks are applied best-effort and at-least-once: repeating a callback is
a no-op, and with no ordering information the last callback received wins.
"""

import structlog

from ...domain.entities import normalize_status
from ...domain.exceptions import ValidationError
from ..dtos import DeliveryStatusCallbackDTO, ReconciliationResultDTO
from ..ports.inbound import ReconcileDeliveryStatusUseCase
from ..ports.outbound import MessageRepository

logger = structlog.get_logger()


class ReconcileDeliveryStatusService(ReconcileDeliveryStatusUseCase):
    """
    Applies a provider status to the stored messages it refers to.

    Correlation prefers the provider message reference captured at send time.
    Without one, and with ``recipient_fallback`` enabled, every message for
    the callback's recipient is updated. That fallback cannot tell two
    messages to the same number apart.
    """

    def __init__(self, repository: MessageRepository, recipient_fallback: bool = True) -> None:
        self._repository = repository
        self._recipient_fallback = recipient_fallback

    async def execute(self, dto: DeliveryStatusCallbackDTO) -> ReconciliationResultDTO:
        status = normalize_status(dto.status)
        provider_ref = (dto.provider_ref or "").strip()
        recipient = (dto.recipient or "").strip()

        if provider_ref:
            updated = await self._repository.apply_provider_status(
                status, provider_ref=provider_ref
            )
            correlation = "provider_ref"
        elif recipient:
            if not self._recipient_fallback:
                logger.warning(
                    "Delivery status callback without provider reference ignored",
                    status=status,
                )
                return ReconciliationResultDTO(status=status, updated=0)
            updated = await self._repository.apply_provider_status(status, recipient=recipient)
            correlation = "recipient"
        else:
            raise ValidationError("Callback must carry a provider reference or a recipient")

        logger.info(
            "Delivery status applied",
            status=status,
            correlation=correlation,
            updated=updated,
        )
        return ReconciliationResultDTO(status=status, updated=updated)
