"""
Factory for the delivery backend.

The backend is chosen once at process start from configuration. All
backends implement the same DeliveryBackend port.
"""

import structlog

from ...application.ports.outbound import DeliveryBackend
from ...config import Settings
from .backends import SimulatedSmsBackend, SnsSmsBackend, TwilioSmsBackend

logger = structlog.get_logger()


class DeliveryBackendFactory:
    """Creates the configured DeliveryBackend implementation."""

    @classmethod
    def create(cls, settings: Settings) -> DeliveryBackend:
        """
        Build the backend named by ``settings.delivery_backend``.

        Raises:
            ValueError: If the backend is unknown or its configuration is incomplete
        """
        backend = cls._create_backend(settings)
        logger.info("Delivery backend selected", backend=backend.name)
        return backend

    @classmethod
    def _create_backend(cls, settings: Settings) -> DeliveryBackend:
        match settings.delivery_backend:
            case "simulated":
                return SimulatedSmsBackend(success_rate=settings.simulated_success_rate)
            case "twilio":
                return TwilioSmsBackend(
                    account_sid=settings.twilio_account_sid,
                    auth_token=settings.twilio_auth_token,
                    from_number=settings.twilio_phone_number,
                    status_callback_url=settings.twilio_status_callback_url,
                )
            case "sns":
                return SnsSmsBackend(
                    sender_id=settings.sns_sender_id,
                    region=settings.aws_region,
                    endpoint_url=settings.aws_endpoint_url,
                )
            case _:
                raise ValueError(f"Unsupported delivery backend: {settings.delivery_backend}")
