from datetime import timedelta
from uuid import uuid4

import httpx
import pytest
import pytest_asyncio

from sms_scheduler.bootstrap import build_container
from sms_scheduler.config import Settings
from sms_scheduler.main import create_app


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(
        database_url=database_url,
        scheduler_enabled=False,
        send_interval_seconds=0,
        delivery_retry_delay_seconds=0,
    )


@pytest_asyncio.fixture
async def container(settings, backend, rate_gate, clock):
    container = build_container(settings, backend=backend, rate_gate=rate_gate, clock=clock)
    await container.database.create_tables()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def payload(clock):
    return {
        "recipient": "+14155550100",
        "body": "Hello from the scheduler",
        "scheduled_at": (clock() + timedelta(hours=1)).isoformat(),
    }


async def create(client, payload) -> dict:
    response = await client.post("/api/v1/messages", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestMessagesApi:
    @pytest.mark.asyncio
    async def test_schedule_message(self, client, payload):
        response = await client.post("/api/v1/messages", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["recipient"] == "+14155550100"
        assert data["attempts"] == 0
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_schedule_in_the_past_returns_400(self, client, payload, clock):
        payload["scheduled_at"] = (clock() - timedelta(seconds=1)).isoformat()

        response = await client.post("/api/v1/messages", json=payload)

        assert response.status_code == 400
        assert "future" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_schedule_without_offset_returns_400(self, client, payload):
        payload["scheduled_at"] = "2030-01-01T10:00:00"

        response = await client.post("/api/v1/messages", json=payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_schedule_invalid_recipient_returns_422(self, client, payload):
        payload["recipient"] = "not-a-number"

        response = await client.post("/api/v1/messages", json=payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_messages_latest_first(self, client, payload, clock):
        first = await create(client, payload)
        payload["scheduled_at"] = (clock() + timedelta(days=1)).isoformat()
        second = await create(client, payload)

        response = await client.get("/api/v1/messages")

        assert response.status_code == 200
        ids = [m["id"] for m in response.json()["messages"]]
        assert ids == [second["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_get_message(self, client, payload):
        created = await create(client, payload)

        response = await client.get(f"/api/v1/messages/{created['id']}")

        assert response.status_code == 200
        assert response.json()["body"] == "Hello from the scheduler"

    @pytest.mark.asyncio
    async def test_get_unknown_message_returns_404(self, client):
        response = await client.get(f"/api/v1/messages/{uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_pending_message(self, client, payload, clock):
        created = await create(client, payload)
        payload["body"] = "Edited"

        response = await client.put(f"/api/v1/messages/{created['id']}", json=payload)

        assert response.status_code == 200
        assert response.json()["body"] == "Edited"

    @pytest.mark.asyncio
    async def test_update_sent_message_returns_409(self, client, container, payload, clock):
        created = await create(client, payload)
        clock.advance(hours=2)
        await container.poll_scheduler.tick()
        payload["scheduled_at"] = (clock() + timedelta(hours=1)).isoformat()

        response = await client.put(f"/api/v1/messages/{created['id']}", json=payload)

        assert response.status_code == 409
        assert response.json()["status"] == "sent"

    @pytest.mark.asyncio
    async def test_update_sent_message_with_bad_time_returns_409(
        self, client, container, payload, clock
    ):
        created = await create(client, payload)
        clock.advance(hours=2)
        await container.poll_scheduler.tick()
        payload["scheduled_at"] = "not-a-date"

        response = await client.put(f"/api/v1/messages/{created['id']}", json=payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_unknown_message_with_bad_time_returns_404(self, client, payload):
        payload["scheduled_at"] = "not-a-date"

        response = await client.put(f"/api/v1/messages/{uuid4()}", json=payload)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_message(self, client, payload):
        created = await create(client, payload)

        response = await client.delete(f"/api/v1/messages/{created['id']}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/messages/{created['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_message_returns_404(self, client):
        response = await client.delete(f"/api/v1/messages/{uuid4()}")

        assert response.status_code == 404


class TestDeliveryStatusCallback:
    @pytest.mark.asyncio
    async def test_callback_updates_by_message_sid(self, client, container, payload, clock):
        created = await create(client, payload)
        clock.advance(hours=2)
        await container.poll_scheduler.tick()

        response = await client.post(
            "/api/v1/message-status",
            data={"MessageSid": "SM0001", "MessageStatus": "delivered", "To": payload["recipient"]},
        )

        assert response.status_code == 200
        assert response.json() == {"status": "delivered", "updated": 1}
        stored = (await client.get(f"/api/v1/messages/{created['id']}")).json()
        assert stored["status"] == "delivered"

    @pytest.mark.asyncio
    async def test_repeated_callback_is_idempotent(self, client, container, payload, clock):
        created = await create(client, payload)
        clock.advance(hours=2)
        await container.poll_scheduler.tick()
        form = {"MessageSid": "SM0001", "MessageStatus": "delivered"}

        await client.post("/api/v1/message-status", data=form)
        response = await client.post("/api/v1/message-status", data=form)

        assert response.json()["updated"] == 0
        stored = (await client.get(f"/api/v1/messages/{created['id']}")).json()
        assert stored["status"] == "delivered"

    @pytest.mark.asyncio
    async def test_unmatched_callback_still_succeeds(self, client):
        response = await client.post(
            "/api/v1/message-status",
            data={"MessageSid": "SMunknown", "MessageStatus": "failed"},
        )

        assert response.status_code == 200
        assert response.json()["updated"] == 0

    @pytest.mark.asyncio
    async def test_callback_without_correlation_key_returns_400(self, client):
        response = await client.post("/api/v1/message-status", data={"MessageStatus": "delivered"})

        assert response.status_code == 400


class TestHealthApi:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_readiness_checks_database(self, client):
        response = await client.get("/health/ready")

        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["delivery_backend"] == "scripted"
        assert "poll_scheduler" not in data["checks"]

    @pytest.mark.asyncio
    async def test_readiness_degraded_when_scheduler_stopped(self, container):
        container.settings.scheduler_enabled = True
        app = create_app(container=container)
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["poll_scheduler"]["status"] == "unhealthy"


class TestCorrelationId:
    @pytest.mark.asyncio
    async def test_incoming_request_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "lb-7f3a.42"})

        assert response.headers["X-Request-ID"] == "lb-7f3a.42"
        assert response.headers["X-Correlation-ID"] == "lb-7f3a.42"

    @pytest.mark.asyncio
    async def test_unusable_request_id_is_replaced(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "x" * 200})

        assert response.headers["X-Request-ID"] != "x" * 200
        assert len(response.headers["X-Request-ID"]) == 36
