from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Delivered:
    """The provider accepted the message."""

    provider_ref: str
    attempts: int


@dataclass(frozen=True)
class DeliveryFailure:
    """Every attempt failed. Terminal: the message is never retried again."""

    reason: str
    attempts: int


DeliveryOutcome = Delivered | DeliveryFailure


class DeliveryClient(ABC):
    """Output port for delivering a message, retries included."""

    @abstractmethod
    async def send(self, recipient: str, body: str) -> DeliveryOutcome: ...


class RateGate(ABC):
    """Output port for spacing out send attempts."""

    @abstractmethod
    async def wait(self) -> None:
        """Block until the next send is allowed."""
        ...
