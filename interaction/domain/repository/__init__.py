"""Repository interfaces for the interaction domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from interaction.domain.repository.comment import CommentRepository
from interaction.domain.repository.comment_like import CommentLikeRepository
from interaction.domain.repository.reaction import ReactionRepository

__all__ = [
    "CommentRepository",
    "CommentLikeRepository",
    "ReactionRepository",
]
