"""
Poll scheduler: periodically dispatches messages that have become due.

Level-triggered: every tick re-queries the store for pending messages whose
scheduled time has passed, so messages missed during downtime are picked up,
late, by the next successful tick. One instance per deployment; running two
would dispatch every due message twice.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ...application.ports.inbound import DispatchMessageUseCase
from ...application.ports.outbound import MessageRepository
from ...domain.clock import Clock, utc_now
from ...domain.entities import MessageStatus
from ...domain.exceptions import StoreError
from ..logging import Timer, new_tick_id

logger = structlog.get_logger()


@dataclass
class TickReport:
    """What one poll tick did."""

    found: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    store_unavailable: bool = False


class PollScheduler:
    """Runs poll ticks on a fixed interval and hands due messages to dispatch."""

    JOB_ID = "poll_due_messages"

    def __init__(
        self,
        repository: MessageRepository,
        dispatcher: DispatchMessageUseCase,
        interval_seconds: float = 30,
        clock: Clock = utc_now,
        run_on_start: bool = True,
    ) -> None:
        self._repository = repository
        self._dispatcher = dispatcher
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._run_on_start = run_on_start
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    async def tick(self, now: datetime | None = None) -> TickReport:
        """
        Run one poll tick.

        Due messages are dispatched strictly one after another. A store
        failure while querying skips the whole tick; a failure while recording
        one result skips only that message.
        """
        new_tick_id()
        now = now or self._clock()
        report = TickReport()

        with Timer() as t:
            try:
                due = await self._repository.find_due(now)
            except StoreError as e:
                logger.warning("Message store unavailable, skipping tick", error=str(e))
                report.store_unavailable = True
                return report

            report.found = len(due)
            if due:
                logger.info("Dispatching due messages", count=len(due), now=now.isoformat())

            for message in due:
                try:
                    status = await self._dispatcher.execute(message)
                except StoreError as e:
                    logger.error(
                        "Failed to record dispatch result",
                        message_id=str(message.id),
                        error=str(e),
                    )
                    report.skipped += 1
                    continue
                except Exception:
                    logger.exception("Dispatch failed unexpectedly", message_id=str(message.id))
                    report.skipped += 1
                    continue

                if status == MessageStatus.SENT.value:
                    report.sent += 1
                elif status == MessageStatus.FAILED.value:
                    report.failed += 1
                else:
                    report.skipped += 1

        if report.found:
            logger.info(
                "Poll tick completed",
                found=report.found,
                sent=report.sent,
                failed=report.failed,
                skipped=report.skipped,
                duration_ms=t.duration_ms,
            )
        else:
            logger.debug("No due messages found")
        return report

    async def _run_job(self) -> None:
        """APScheduler job. Never lets an exception escape the loop."""
        try:
            await self.tick()
        except Exception:
            logger.exception("Poll tick failed, will retry next interval")

    def start(self) -> None:
        """Start ticking. Must be called from within a running event loop."""
        if self._scheduler is not None:
            return

        job_kwargs = {}
        if self._run_on_start:
            job_kwargs["next_run_time"] = datetime.now(UTC)

        self._scheduler = AsyncIOScheduler(timezone=UTC)
        self._scheduler.add_job(
            self._run_job,
            "interval",
            seconds=self._interval_seconds,
            id=self.JOB_ID,
            max_instances=1,  # Prevent overlapping ticks
            coalesce=True,
            **job_kwargs,
        )
        self._scheduler.start()
        logger.info("Poll scheduler started", poll_interval=self._interval_seconds)

    def shutdown(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Poll scheduler stopped")
