import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

from ...application.ports.outbound import RateGate

logger = structlog.get_logger()


class FixedIntervalRateGate(RateGate):
    """
    Blocking gate enforcing a minimum spacing between send attempts.

    A plain fixed-rate limiter: no bursts, no token accumulation. The first
    caller passes immediately; every later caller waits until
    ``min_interval`` seconds have passed since the previous caller passed.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_pass: float | None = None

    async def wait(self) -> None:
        async with self._lock:
            if self._last_pass is not None:
                # Loop: the event loop may wake a timer slightly early
                remaining = self._last_pass + self._min_interval - self._clock()
                while remaining > 0:
                    logger.debug("Rate gate waiting", wait_s=round(remaining, 3))
                    await self._sleep(remaining)
                    remaining = self._last_pass + self._min_interval - self._clock()
            self._last_pass = self._clock()
