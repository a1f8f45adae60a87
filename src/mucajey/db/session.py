"""Async engine and session lifecycle for the local cache database."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from mucajey.config.database import DatabaseSettings
from mucajey.db.base import Base


def _engine_options(settings: DatabaseSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.echo}
    if settings.use_null_pool:
        options["poolclass"] = NullPool
    else:
        options["pool_pre_ping"] = settings.pool_pre_ping
    if make_url(settings.database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"timeout": settings.busy_timeout_seconds}
    return options


class DatabaseManager:
    """Owns the async engine of the cache database.

    Each unit of work gets its own session from :meth:`session`, which commits
    when the block exits cleanly and rolls back otherwise::

        db = DatabaseManager(DatabaseSettings())
        await db.create_all()

        async with db.session() as session:
            session.add(card)

        await db.dispose()
    """

    def __init__(self, settings: DatabaseSettings) -> None:
        self._settings = settings
        self._engine = create_async_engine(settings.database_url, **_engine_options(settings))
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False, autoflush=False)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create the cache tables that do not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()
