from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from ..logging import correlation_id
from .models import Base


def _engine_kwargs(url: str, echo: bool) -> dict:
    """Return database-specific engine configuration."""
    if url.startswith("sqlite"):
        # One connection per session; the busy timeout absorbs writer contention
        # between the poll loop and request handlers.
        return {"echo": echo, "poolclass": NullPool, "connect_args": {"timeout": 30}}
    return {"echo": echo, "pool_pre_ping": True}


class Database:
    """Database connection manager."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self._url = url
        self._engine = create_async_engine(url, **_engine_kwargs(url, echo))
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        self._attach_correlation_id_hook()

    def _attach_correlation_id_hook(self) -> None:
        """Prefix SQL statements issued during a request with its correlation ID."""

        @event.listens_for(self._engine.sync_engine, "before_cursor_execute", retval=True)
        def _inject_correlation_comment(conn, cursor, statement, parameters, context, executemany):
            cid = correlation_id.get("")
            if cid:
                statement = f"/* correlation_id={cid} */ {statement}"
            return statement, parameters

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query. Raises if the database is unreachable."""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Close the database connection."""
        await self._engine.dispose()
