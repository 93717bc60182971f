"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_like import InMemoryCommentLikeRepository
from .reaction import InMemoryReactionRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentLikeRepository",
    "InMemoryReactionRepository",
]
