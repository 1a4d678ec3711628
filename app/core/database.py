"""Database engine, session factory and dialect helpers."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
import structlog

from app.core.config import Settings

logger = structlog.get_logger()

Base = declarative_base()


class Database:
    """Owns the async engine (and its connection pool) for one application."""

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, future=True, **engine_options)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        options: dict = {"echo": settings.DATABASE_ECHO}
        if not settings.is_sqlite():
            options.update(
                pool_size=settings.DATABASE_POOL_SIZE,
                max_overflow=settings.DATABASE_MAX_OVERFLOW,
                pool_pre_ping=True,
                pool_recycle=3600
            )
        return cls(settings.DATABASE_URL, **options)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.sessionmaker() as session:
            yield session

    async def create_all(self):
        """Create any missing tables. Not a migration tool."""
        # Import models so their tables are registered on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured", tables=len(Base.metadata.tables))

    async def ping(self):
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self):
        await self.engine.dispose()


def conflict_insert(session: AsyncSession, model):
    """Return a dialect INSERT for ``model`` that supports ON CONFLICT clauses.

    PostgreSQL and SQLite share the ``on_conflict_do_nothing`` /
    ``on_conflict_do_update`` API, so callers stay dialect-agnostic.
    """
    dialect = session.bind.dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"ON CONFLICT inserts are not supported for dialect {dialect!r}")
