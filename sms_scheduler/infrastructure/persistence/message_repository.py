"""
SQLAlchemy implementation of the MessageRepository port.

Each call runs in its own session, so a single repository instance can be
shared by the poll loop and concurrent request handlers. Conditional writes
are expressed as a single UPDATE ... WHERE, which keeps read-modify-write
atomic per record without cross-record transactions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...application.ports.outbound import MessageRepository
from ...domain.clock import Clock, utc_now
from ...domain.entities import MessageStatus, ScheduledMessage
from ...domain.exceptions import InvalidStateError, MessageNotFoundError, StoreError
from .models import ScheduledMessageModel, _naive_utc, column_values

logger = structlog.get_logger()


class SqlAlchemyMessageRepository(MessageRepository):
    """SQLAlchemy implementation of MessageRepository."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock = utc_now,
    ) -> None:
        """
        Args:
            session_factory: Factory for SQLAlchemy async sessions
            clock: Source of created_at/updated_at timestamps
        """
        self._session_factory = session_factory
        self._clock = clock

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Open a session, translating driver errors into StoreError."""
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(
                "Message store operation failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StoreError(str(e)) from e

    async def create(self, message: ScheduledMessage) -> UUID:
        """Insert a new message, stamping created_at and updated_at."""
        now = self._clock()
        message.created_at = now
        message.updated_at = now

        async with self._session() as session:
            session.add(ScheduledMessageModel.from_entity(message))
            await session.commit()
        return message.id

    async def get(self, message_id: UUID) -> ScheduledMessage:
        async with self._session() as session:
            model = await session.get(ScheduledMessageModel, message_id)
            if model is None:
                raise MessageNotFoundError(message_id)
            return model.to_entity()

    async def list(self) -> list[ScheduledMessage]:
        stmt = select(ScheduledMessageModel).order_by(
            ScheduledMessageModel.scheduled_at.desc(),
            ScheduledMessageModel.created_at.desc(),
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return [model.to_entity() for model in result.scalars()]

    async def update(
        self,
        message: ScheduledMessage,
        expected_status: str | None = None,
    ) -> None:
        """Overwrite a stored message, optionally guarded on its current status."""
        now = self._clock()
        values = column_values(message)
        values.pop("created_at")
        values["updated_at"] = _naive_utc(now)

        stmt = (
            update(ScheduledMessageModel)
            .where(ScheduledMessageModel.id == message.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if expected_status is not None:
            stmt = stmt.where(ScheduledMessageModel.status == expected_status)

        await self._execute_guarded(stmt, message.id)
        message.updated_at = now

    async def record_dispatch(self, message: ScheduledMessage) -> None:
        """Write the send outcome columns while the stored row is still pending."""
        now = self._clock()
        stmt = (
            update(ScheduledMessageModel)
            .where(
                ScheduledMessageModel.id == message.id,
                ScheduledMessageModel.status == MessageStatus.PENDING.value,
            )
            .values(
                status=message.status,
                provider_ref=message.provider_ref,
                failure_reason=message.failure_reason,
                attempts=message.attempts,
                updated_at=_naive_utc(now),
            )
            .execution_options(synchronize_session=False)
        )

        await self._execute_guarded(stmt, message.id)
        message.updated_at = now

    async def _execute_guarded(self, stmt, message_id: UUID) -> None:
        """Run a conditional UPDATE, explaining why it matched no row."""
        async with self._session() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                current = await session.scalar(
                    select(ScheduledMessageModel.status).where(
                        ScheduledMessageModel.id == message_id
                    )
                )
                if current is None:
                    raise MessageNotFoundError(message_id)
                raise InvalidStateError(message_id, current)
            await session.commit()

    async def delete(self, message_id: UUID) -> bool:
        async with self._session() as session:
            result = await session.execute(
                delete(ScheduledMessageModel)
                .where(ScheduledMessageModel.id == message_id)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
        return result.rowcount > 0

    async def find_due(self, now: datetime) -> list[ScheduledMessage]:
        """Pending messages scheduled at or before ``now``, oldest first."""
        stmt = (
            select(ScheduledMessageModel)
            .where(
                ScheduledMessageModel.status == MessageStatus.PENDING.value,
                ScheduledMessageModel.scheduled_at <= _naive_utc(now),
            )
            .order_by(ScheduledMessageModel.scheduled_at.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return [model.to_entity() for model in result.scalars()]

    async def apply_provider_status(
        self,
        status: str,
        *,
        provider_ref: str | None = None,
        recipient: str | None = None,
    ) -> int:
        """Set ``status`` on matching rows that do not already carry it."""
        if (provider_ref is None) == (recipient is None):
            raise ValueError("Exactly one of provider_ref or recipient is required")

        stmt = (
            update(ScheduledMessageModel)
            .where(ScheduledMessageModel.status != status)
            .values(status=status, updated_at=_naive_utc(self._clock()))
            .execution_options(synchronize_session=False)
        )
        if provider_ref is not None:
            stmt = stmt.where(ScheduledMessageModel.provider_ref == provider_ref)
        else:
            stmt = stmt.where(ScheduledMessageModel.recipient == recipient)

        async with self._session() as session:
            result = await session.execute(stmt)
            await session.commit()
        return result.rowcount
