"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from interaction.config import Settings
from interaction.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    ReactionRepository,
)
from interaction.domain.service import EventEmitter
from interaction.persistence.database import create_engine, create_session_factory
from interaction.persistence.repository import (
    PostgresCommentLikeRepository,
    PostgresCommentRepository,
    PostgresReactionRepository,
)
from interaction.util.di.base import ProviderBase
from interaction.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        event_emitter: EventEmitter,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        Events emitted during the request are held until the commit
        succeeds and dropped on rollback.
        """
        event_emitter.hold()
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                event_emitter.discard()
                raise
        await event_emitter.release()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_like_repository(
        self, session: AsyncSession
    ) -> CommentLikeRepository:
        """Provide CommentLike repository."""
        return PostgresCommentLikeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, session: AsyncSession) -> ReactionRepository:
        """Provide Reaction repository."""
        return PostgresReactionRepository(session)
