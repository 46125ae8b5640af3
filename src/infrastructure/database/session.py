"""Database engine and session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


class Database:
    """Connection pool handle.

    Built once by the app factory and handed to whatever needs sessions;
    tests construct their own against SQLite.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.async_database_url
        engine_kwargs: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
        connect_args: dict[str, Any] = {}

        if url.startswith("postgresql+asyncpg://"):
            engine_kwargs["pool_size"] = settings.db_pool_size
            engine_kwargs["pool_timeout"] = settings.db_pool_timeout_seconds
            # Transaction-mode poolers (pgbouncer, Supavisor) break asyncpg's
            # prepared statement cache
            if "pooler" in url or "pgbouncer" in url:
                connect_args["statement_cache_size"] = 0
            if settings.db_ssl:
                connect_args["ssl"] = "require"

        engine = create_async_engine(url, connect_args=connect_args, **engine_kwargs)
        return cls(engine)

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Dependency for getting async database sessions."""
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def dispose(self) -> None:
        await self.engine.dispose()
