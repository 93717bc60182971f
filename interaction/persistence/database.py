"""Async engine and session factory for the PostgreSQL store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from interaction.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the engine from ``settings.database``.

    SQL statements are echoed when ``settings.debug`` is on.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for one unit of work per request.

    Objects stay usable after commit, and repositories flush explicitly
    when they need store-assigned IDs.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
