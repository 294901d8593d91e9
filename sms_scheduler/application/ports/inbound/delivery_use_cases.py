from abc import ABC, abstractmethod

from ....domain.entities import ScheduledMessage
from ...dtos import DeliveryStatusCallbackDTO, ReconciliationResultDTO


class DispatchMessageUseCase(ABC):
    """Input port for delivering one due message and recording the result."""

    @abstractmethod
    async def execute(self, message: ScheduledMessage) -> str | None:
        """Returns the status written back, or None if nothing was recorded."""
        ...


class ReconcileDeliveryStatusUseCase(ABC):
    """Input port for applying provider delivery-status callbacks."""

    @abstractmethod
    async def execute(self, dto: DeliveryStatusCallbackDTO) -> ReconciliationResultDTO: ...
