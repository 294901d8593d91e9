"""
Twilio SMS backend.

Uses the Messages REST resource directly over httpx (form-encoded POST,
basic auth). The returned message SID is the provider reference that later
delivery-status callbacks carry as ``MessageSid``.
"""

import httpx
import structlog

from ....application.ports.outbound import DeliveryBackend, DeliveryResult
from ...logging import mask_phone_number

logger = structlog.get_logger()


class TwilioSmsBackend(DeliveryBackend):
    """Twilio Programmable Messaging backend."""

    name = "twilio"
    BASE_URL = "https://api.twilio.com/2010-04-01/Accounts"

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        status_callback_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not (account_sid and auth_token and from_number):
            raise ValueError(
                "Twilio configuration missing. Set TWILIO_ACCOUNT_SID, "
                "TWILIO_AUTH_TOKEN and TWILIO_PHONE_NUMBER."
            )
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._from_number = from_number
        self._status_callback_url = status_callback_url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def messages_url(self) -> str:
        return f"{self.BASE_URL}/{self._account_sid}/Messages.json"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                auth=(self._account_sid, self._auth_token),
                timeout=httpx.Timeout(self._timeout, connect=5.0),
                transport=self._transport,
            )
        return self._client

    async def send(self, recipient: str, body: str) -> DeliveryResult:
        """Create a Twilio message."""
        data = {
            "To": recipient,
            "From": self._from_number,
            "Body": body,
        }
        if self._status_callback_url:
            data["StatusCallback"] = self._status_callback_url

        try:
            response = await self._get_client().post(self.messages_url, data=data)
            response.raise_for_status()
            sid = response.json().get("sid")

            logger.info(
                "SMS sent",
                provider=self.name,
                provider_ref=sid,
                recipient=mask_phone_number(recipient),
            )
            return DeliveryResult(success=True, provider_ref=sid)

        except httpx.HTTPStatusError as e:
            error = f"Twilio API error {e.response.status_code}: {_error_detail(e.response)}"
            logger.error(
                "SMS delivery failed",
                provider=self.name,
                error=error,
                recipient=mask_phone_number(recipient),
            )
            return DeliveryResult(success=False, error=error)
        except httpx.HTTPError as e:
            logger.error(
                "SMS delivery failed",
                provider=self.name,
                error=str(e),
                recipient=mask_phone_number(recipient),
            )
            return DeliveryResult(success=False, error=str(e) or type(e).__name__)

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()


def _error_detail(response: httpx.Response) -> str:
    """Twilio reports errors as JSON ``{"code": ..., "message": ...}``."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text[:500]
