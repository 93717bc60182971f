"""Comment like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from interaction.domain.model.comment_like import CommentLike
from interaction.domain.value import CommentId, UserId


class CommentLikeRepository(ABC):
    """Repository for CommentLike entity."""

    @abstractmethod
    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment.

        Args:
            comment_id: The comment ID
            user_id: The user's ID

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, like: CommentLike) -> CommentLike:
        """Save a like (create).

        Args:
            like: The like to save

        Returns:
            The saved like with its ID assigned

        Raises:
            IntegrityError: If the user already liked the comment
        """
        pass

    @abstractmethod
    async def delete_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> bool:
        """Delete a user's like on a comment.

        Args:
            comment_id: The comment ID
            user_id: The user's ID

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment.

        Args:
            comment_id: The comment ID

        Returns:
            Number of likes
        """
        pass
