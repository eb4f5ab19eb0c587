"""Async database manager for Badge-Ledger.

Each ``get_session()`` block is one registry invocation: it commits every
write on a clean exit and rolls all of them back when an exception escapes.
Invocations are serialized, so no two of them ever interleave.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from badge_ledger.common.config import BadgeSettings, get_settings
from badge_ledger.common.models import Base

# Import all model modules so Base.metadata is complete for create_all().
import badge_ledger.registry.models  # noqa: F401
import badge_ledger.events.models  # noqa: F401


def _use_immediate_transactions(engine: AsyncEngine) -> None:
    """Take SQLite's write lock at BEGIN rather than at the first write.

    Other processes sharing the file then block before reading the counter
    instead of failing on the insert that follows.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseManager:
    """Manages a single async database engine."""

    def __init__(self, settings: BadgeSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        # Single writer: held for the whole of each get_session() block
        self._invocation_lock = asyncio.Lock()

    async def init(self) -> None:
        url = self._settings.db_url
        kwargs = {}
        if self._settings.uses_ephemeral_db:
            # One shared connection, otherwise each session gets an empty DB
            kwargs["poolclass"] = StaticPool
        self.engine = create_async_engine(url, echo=False, **kwargs)
        if self.engine.dialect.name == "sqlite":
            _use_immediate_transactions(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self._invocation_lock:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

    async def create_all(self) -> None:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self._invocation_lock:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
