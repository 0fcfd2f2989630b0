"""Database handle: engine, session factory, and transactions.

The handle is created once per application (or test) and passed to every
service that needs persistence. Each service operation opens its own
transaction through ``Database.transaction()``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lightlog.core.database.base import Base


if TYPE_CHECKING:
    from lightlog.config import Settings


logger = structlog.get_logger()


class Database:
    """Owns the async engine and hands out sessions.

    Usage:
        db = Database("postgresql+asyncpg://...")
        async with db.transaction() as session:
            session.add(obj)
        await db.dispose()
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo}
        # SQLite drivers manage their own pool
        if not url.startswith("sqlite"):
            engine_kwargs["pool_pre_ping"] = True
            if pool_size is not None:
                engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                engine_kwargs["max_overflow"] = max_overflow

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Database":
        """Create a handle from application settings."""
        return cls(
            settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session without starting a transaction."""
        async with self.session_factory() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session inside a transaction.

        Commits when the block exits normally and rolls back on any
        exception, which is then re-raised.
        """
        async with self.session_factory() as session, session.begin():
            yield session

    async def ping(self) -> bool:
        """Check connectivity with a trivial query."""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True

    async def create_all(self) -> None:
        """Create all tables known to the model metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_tables_created")

    async def drop_all(self) -> None:
        """Drop all tables known to the model metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all pooled connections. Call during shutdown."""
        await self.engine.dispose()
