"""Mock persistence providers for testing."""

from dishka import Scope, provide

from interaction.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    ReactionRepository,
)
from interaction.persistence.repository.inmemory import (
    InMemoryCommentLikeRepository,
    InMemoryCommentRepository,
    InMemoryReactionRepository,
)
from interaction.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope so that state survives across the requests of one test
    client. Every test builds its own container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_comment_like_repository(self) -> CommentLikeRepository:
        """Provide in-memory comment like repository."""
        return InMemoryCommentLikeRepository()

    @provide(scope=Scope.APP)
    def get_reaction_repository(self) -> ReactionRepository:
        """Provide in-memory reaction repository."""
        return InMemoryReactionRepository()
