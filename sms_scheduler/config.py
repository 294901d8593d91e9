from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment."""

    # Service
    service_name: str = "sms-scheduler"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./messages.db"

    # Poll scheduler
    scheduler_enabled: bool = True
    poll_interval_seconds: int = 30
    poll_on_startup: bool = True  # Run one tick as soon as the service starts

    # Dispatch
    send_interval_seconds: float = 1.0  # Minimum spacing between sends
    delivery_max_attempts: int = 3
    delivery_retry_delay_seconds: float = 2.0
    delivery_attempt_timeout_seconds: float | None = 15.0

    # Delivery backend
    delivery_backend: Literal["simulated", "twilio", "sns"] = "simulated"
    simulated_success_rate: float = 0.9

    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    twilio_status_callback_url: str | None = None

    # AWS SNS
    sns_sender_id: str = ""
    aws_region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack

    # Delivery-status callbacks
    callback_recipient_fallback: bool = True

    # CORS
    cors_allow_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
