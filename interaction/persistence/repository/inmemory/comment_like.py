"""In-memory comment like repository for testing."""

from itertools import count
from typing import Optional

from sqlalchemy.exc import IntegrityError

from interaction.domain.model import CommentLike
from interaction.domain.repository import CommentLikeRepository
from interaction.domain.value import CommentId, CommentLikeId, UserId


class InMemoryCommentLikeRepository(CommentLikeRepository):
    """In-memory implementation of CommentLikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[tuple[CommentId, UserId], CommentLike] = {}
        self._ids = count(1)

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        return self._likes.get((comment_id, user_id))

    async def save(self, like: CommentLike) -> CommentLike:
        """Save a like.

        Raises:
            IntegrityError: If the user already liked the comment
        """
        key = (like.comment_id, like.user_id)
        if key in self._likes:
            raise IntegrityError("Duplicate comment like", None, Exception())

        saved = like.model_copy(update={"id": CommentLikeId(next(self._ids))})
        self._likes[key] = saved
        return saved

    async def delete_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> bool:
        """Delete a user's like on a comment."""
        return self._likes.pop((comment_id, user_id), None) is not None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        return sum(1 for key in self._likes if key[0] == comment_id)
