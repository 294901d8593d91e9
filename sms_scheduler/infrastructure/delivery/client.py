"""
Delivery client: one logical send, several provider attempts.

Fixed delay between attempts, no exponential backoff. After the last failed
attempt the client reports DeliveryFailure and the message is never retried
again.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog
from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt, wait_fixed

from ...application.ports.outbound import (
    Delivered,
    DeliveryBackend,
    DeliveryClient,
    DeliveryFailure,
    DeliveryOutcome,
    DeliveryResult,
)
from ..logging import Timer, mask_phone_number

logger = structlog.get_logger()


def _attempt_failed(result: DeliveryResult) -> bool:
    return not (result.success and result.provider_ref)


class RetryingDeliveryClient(DeliveryClient):
    """Wraps a DeliveryBackend with bounded, fixed-delay retries."""

    def __init__(
        self,
        backend: DeliveryBackend,
        max_attempts: int = 3,
        retry_delay: float = 2.0,
        attempt_timeout: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Args:
            backend: Provider adapter making the actual calls
            max_attempts: Attempts before giving up (N)
            retry_delay: Seconds to wait between attempts
            attempt_timeout: Upper bound in seconds for a single provider call
            sleep: Awaitable sleep used between attempts
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._backend = backend
        self._max_attempts = max_attempts
        self._retry_delay = retry_delay
        self._attempt_timeout = attempt_timeout
        self._sleep = sleep

    async def send(self, recipient: str, body: str) -> DeliveryOutcome:
        attempts = 0

        async def attempt() -> DeliveryResult:
            nonlocal attempts
            attempts += 1
            return await self._attempt(recipient, body, attempts)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_result(_attempt_failed),
            retry_error_callback=lambda state: state.outcome.result(),
            before_sleep=self._log_retry,
            sleep=self._sleep,
        )

        with Timer() as t:
            result = await retrying(attempt)

        if _attempt_failed(result):
            logger.error(
                "Delivery failed after all attempts",
                backend=self._backend.name,
                recipient=mask_phone_number(recipient),
                attempts=attempts,
                error=result.error,
                duration_ms=t.duration_ms,
            )
            return DeliveryFailure(reason=result.error or "Delivery failed", attempts=attempts)

        return Delivered(provider_ref=result.provider_ref, attempts=attempts)

    async def _attempt(self, recipient: str, body: str, number: int) -> DeliveryResult:
        """Run one provider call. Never raises for provider or transport errors."""
        try:
            if self._attempt_timeout:
                result = await asyncio.wait_for(
                    self._backend.send(recipient, body), timeout=self._attempt_timeout
                )
            else:
                result = await self._backend.send(recipient, body)
        except TimeoutError:
            result = DeliveryResult(
                success=False, error=f"Provider call timed out after {self._attempt_timeout}s"
            )
        except Exception as e:
            result = DeliveryResult(success=False, error=str(e) or type(e).__name__)

        if result.success and not result.provider_ref:
            result = DeliveryResult(
                success=False, error="Provider returned an empty message reference"
            )

        if not result.success:
            logger.warning(
                "Delivery attempt failed",
                backend=self._backend.name,
                recipient=mask_phone_number(recipient),
                attempt=number,
                max_attempts=self._max_attempts,
                error=result.error,
            )
        return result

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.info(
            "Retrying delivery",
            backend=self._backend.name,
            next_attempt=retry_state.attempt_number + 1,
            delay_s=self._retry_delay,
        )
