import structlog
from aiobotocore.session import get_session

from ....application.ports.outbound import DeliveryBackend, DeliveryResult
from ...logging import mask_phone_number

logger = structlog.get_logger()


class SnsSmsBackend(DeliveryBackend):
    """AWS SNS SMS backend."""

    name = "sns"

    def __init__(
        self,
        sender_id: str = "",
        region: str = "us-east-1",
        endpoint_url: str | None = None,
    ) -> None:
        self._sender_id = sender_id
        self._region = region
        self._endpoint_url = endpoint_url
        self._session = get_session()

    async def send(self, recipient: str, body: str) -> DeliveryResult:
        """Publish an SMS via SNS. ``recipient`` must be in E.164 format."""
        client_kwargs = {"region_name": self._region}
        if self._endpoint_url:
            client_kwargs["endpoint_url"] = self._endpoint_url

        attributes = {
            "AWS.SNS.SMS.SMSType": {"DataType": "String", "StringValue": "Transactional"},
        }
        if self._sender_id:
            attributes["AWS.SNS.SMS.SenderID"] = {
                "DataType": "String",
                "StringValue": self._sender_id,
            }

        try:
            async with self._session.create_client("sns", **client_kwargs) as client:
                response = await client.publish(
                    PhoneNumber=recipient,
                    Message=body,
                    MessageAttributes=attributes,
                )
                message_id = response.get("MessageId")

                logger.info(
                    "SMS sent",
                    provider=self.name,
                    provider_ref=message_id,
                    recipient=mask_phone_number(recipient),
                )
                return DeliveryResult(success=True, provider_ref=message_id)

        except Exception as e:
            logger.error(
                "SMS delivery failed",
                provider=self.name,
                error=str(e),
                recipient=mask_phone_number(recipient),
            )
            return DeliveryResult(success=False, error=str(e))
