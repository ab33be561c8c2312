"""Async engine and session factory for PostgreSQL (asyncpg)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campus.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide engine. SQL is echoed when DEBUG is set."""
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for the per-request unit of work.

    The persistence provider opens one session per request and commits or
    rolls it back when the request scope closes. Objects stay usable after
    commit and nothing is flushed implicitly.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
