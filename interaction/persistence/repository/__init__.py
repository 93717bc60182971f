"""PostgreSQL repository implementations."""

from interaction.persistence.repository.comment import PostgresCommentRepository
from interaction.persistence.repository.comment_like import (
    PostgresCommentLikeRepository,
)
from interaction.persistence.repository.reaction import PostgresReactionRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresCommentLikeRepository",
    "PostgresReactionRepository",
]
