"""
Outbound port for a single delivery attempt through an SMS provider.

Adapters (simulated, Twilio, SNS) implement this interface. Retrying is
not their concern.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class DeliveryResult:
    """Result of one provider call."""

    success: bool
    provider_ref: str | None = None
    error: str | None = None


class DeliveryBackend(ABC):
    """Abstract base for SMS provider backends."""

    name: str = "backend"

    @abstractmethod
    async def send(self, recipient: str, body: str) -> DeliveryResult:
        """
        Make one attempt to hand the message to the provider.

        Args:
            recipient: Destination phone number
            body: Message text

        Returns:
            DeliveryResult with the provider's message reference on success
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None
