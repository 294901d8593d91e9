import asyncio
import random
from uuid import uuid4

import structlog

from ....application.ports.outbound import DeliveryBackend, DeliveryResult
from ...logging import mask_phone_number

logger = structlog.get_logger()


class SimulatedSmsBackend(DeliveryBackend):
    """Stub provider that succeeds at random. For development and tests."""

    name = "simulated"

    def __init__(
        self,
        success_rate: float = 0.9,
        rng: random.Random | None = None,
        latency_seconds: float = 0.0,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self._success_rate = success_rate
        self._rng = rng or random.Random()
        self._latency_seconds = latency_seconds

    async def send(self, recipient: str, body: str) -> DeliveryResult:
        if self._latency_seconds:
            await asyncio.sleep(self._latency_seconds)

        if self._rng.random() < self._success_rate:
            provider_ref = f"SIM{uuid4().hex}"
            logger.info(
                "Simulated SMS sent",
                provider_ref=provider_ref,
                recipient=mask_phone_number(recipient),
            )
            return DeliveryResult(success=True, provider_ref=provider_ref)

        return DeliveryResult(success=False, error="Simulated provider failure")
