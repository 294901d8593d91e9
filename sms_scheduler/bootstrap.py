"""
Composition root.

The process owns exactly one store handle, one delivery client and one rate
gate. They are built here and shared by reference between the poll loop and
the request handlers.
"""

from dataclasses import dataclass

from .application.ports.outbound import (
    DeliveryBackend,
    DeliveryClient,
    MessageRepository,
    RateGate,
)
from .application.services import DispatchMessageService
from .config import Settings
from .domain.clock import Clock, utc_now
from .infrastructure.delivery import (
    DeliveryBackendFactory,
    FixedIntervalRateGate,
    RetryingDeliveryClient,
)
from .infrastructure.persistence import Database, SqlAlchemyMessageRepository
from .infrastructure.scheduling import PollScheduler


@dataclass
class Container:
    settings: Settings
    clock: Clock
    database: Database
    repository: MessageRepository
    backend: DeliveryBackend
    delivery_client: DeliveryClient
    rate_gate: RateGate
    dispatcher: DispatchMessageService
    poll_scheduler: PollScheduler

    async def close(self) -> None:
        self.poll_scheduler.shutdown()
        await self.backend.close()
        await self.database.close()


def build_container(
    settings: Settings,
    *,
    backend: DeliveryBackend | None = None,
    rate_gate: RateGate | None = None,
    clock: Clock = utc_now,
) -> Container:
    """
    Wire up the service.

    Args:
        settings: Service configuration
        backend: Delivery backend to use instead of the configured one
        rate_gate: Rate gate to use instead of a fixed-interval gate
        clock: Source of the current time for every component
    """
    database = Database(settings.database_url, echo=settings.debug)
    repository = SqlAlchemyMessageRepository(database.session_factory, clock=clock)

    backend = backend or DeliveryBackendFactory.create(settings)
    delivery_client = RetryingDeliveryClient(
        backend,
        max_attempts=settings.delivery_max_attempts,
        retry_delay=settings.delivery_retry_delay_seconds,
        attempt_timeout=settings.delivery_attempt_timeout_seconds,
    )
    rate_gate = rate_gate or FixedIntervalRateGate(settings.send_interval_seconds)

    dispatcher = DispatchMessageService(
        repository=repository,
        delivery_client=delivery_client,
        rate_gate=rate_gate,
        clock=clock,
    )
    poll_scheduler = PollScheduler(
        repository=repository,
        dispatcher=dispatcher,
        interval_seconds=settings.poll_interval_seconds,
        clock=clock,
        run_on_start=settings.poll_on_startup,
    )

    return Container(
        settings=settings,
        clock=clock,
        database=database,
        repository=repository,
        backend=backend,
        delivery_client=delivery_client,
        rate_gate=rate_gate,
        dispatcher=dispatcher,
        poll_scheduler=poll_scheduler,
    )
