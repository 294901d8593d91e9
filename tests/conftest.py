from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from sms_scheduler.application.ports.outbound import DeliveryBackend, DeliveryResult, RateGate
from sms_scheduler.domain.entities import ScheduledMessage
from sms_scheduler.domain.value_objects import MessageBody
from sms_scheduler.infrastructure.persistence import Database, SqlAlchemyMessageRepository


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class ScriptedBackend(DeliveryBackend):
    """Delivery backend that replays scripted results, then succeeds."""

    name = "scripted"

    def __init__(self, script: list[DeliveryResult | Exception] | None = None) -> None:
        self.script = list(script or [])
        self.calls: list[tuple[str, str]] = []

    async def send(self, recipient: str, body: str) -> DeliveryResult:
        self.calls.append((recipient, body))
        if self.script:
            outcome = self.script.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return DeliveryResult(success=True, provider_ref=f"SM{len(self.calls):04d}")


class OpenRateGate(RateGate):
    """Rate gate that never blocks but counts passes."""

    def __init__(self) -> None:
        self.passes = 0

    async def wait(self) -> None:
        self.passes += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=UTC))


@pytest.fixture
def make_message(clock):
    def factory(
        recipient: str = "+14155550100",
        body: str = "Test message content",
        in_: timedelta = timedelta(hours=1),
    ) -> ScheduledMessage:
        return ScheduledMessage.create(
            recipient=recipient,
            body=MessageBody(body),
            scheduled_at=clock() + in_,
            now=clock(),
        )

    return factory


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'messages.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    db = Database(database_url)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def repository(database, clock) -> SqlAlchemyMessageRepository:
    return SqlAlchemyMessageRepository(database.session_factory, clock=clock)


@pytest.fixture
def backend() -> ScriptedBackend:
    return ScriptedBackend()


@pytest.fixture
def rate_gate() -> OpenRateGate:
    return OpenRateGate()


@pytest.fixture
def make_backend():
    return ScriptedBackend
