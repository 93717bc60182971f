"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from interaction.domain.model.comment import Comment
from interaction.domain.value import CommentId, ContentId, ModerationStatus


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_children_of(
        self,
        parent_ids: Sequence[CommentId],
        limit_per_parent: Optional[int] = None,
    ) -> List[Comment]:
        """Find the direct children of several comments in one query.

        Used to expand a thread one level at a time. Deleted children are
        included; callers decide how to render them.

        Args:
            parent_ids: Parent comment IDs
            limit_per_parent: Maximum number of children returned per parent
                (oldest first)

        Returns:
            Child comments ordered by parent, then creation time ascending
        """
        pass

    @abstractmethod
    async def find_top_level_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find top-level comments on a content item.

        Args:
            content_id: The content ID

        Returns:
            Top-level comments ordered by creation time ascending
        """
        pass

    @abstractmethod
    async def find_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find every comment on a content item, replies included.

        Args:
            content_id: The content ID

        Returns:
            Comments ordered by creation time ascending
        """
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_id: CommentId,
        moderation_statuses: Optional[Sequence[ModerationStatus]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of ACTIVE direct replies to a comment.

        Args:
            parent_id: The parent comment ID
            moderation_statuses: Restrict to these moderation statuses
                (any status when None)
            limit: Page size
            offset: Number of replies to skip

        Returns:
            Replies ordered by creation time ascending
        """
        pass

    @abstractmethod
    async def find_visible_by_generation(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> List[Comment]:
        """Find visible, non-private comments written at a generation level.

        Args:
            generation_level: Generation level to match
            limit: Page size
            offset: Number of comments to skip

        Returns:
            Comments newest first
        """
        pass

    @abstractmethod
    async def find_visible_by_cultural_tag(
        self, cultural_tag: str, limit: int = 50, offset: int = 0
    ) -> List[Comment]:
        """Find visible, non-private comments carrying a cultural tag.

        Args:
            cultural_tag: Tag that must be among the comment's cultural tags
            limit: Page size
            offset: Number of comments to skip

        Returns:
            Comments newest first
        """
        pass

    @abstractmethod
    async def count_hashtags_since(
        self, since: datetime, limit: int
    ) -> List[Tuple[str, int]]:
        """Count hashtag use across visible comments created since a time.

        Args:
            since: Earliest creation time counted
            limit: Maximum number of hashtags returned

        Returns:
            (hashtag, count) pairs, most used first, ties by hashtag
        """
        pass

    @abstractmethod
    async def find_by_moderation_status(
        self,
        statuses: Sequence[ModerationStatus],
        limit: int = 50,
    ) -> List[Comment]:
        """Find comments in any of the given moderation statuses.

        Args:
            statuses: Moderation statuses to match
            limit: Maximum number of comments to return

        Returns:
            Matching comments, oldest first
        """
        pass

    @abstractmethod
    async def count_live_children(self, parent_id: CommentId) -> int:
        """Count direct children that are not deleted.

        Args:
            parent_id: The parent comment ID

        Returns:
            Number of non-deleted replies
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        A comment without an ID is inserted and returned with the ID
        assigned by the store. A comment with an ID replaces the stored
        row, except for the reply and like counters, which only change
        through the counter methods.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def set_counters(
        self, comment_id: CommentId, reply_count: int, like_count: int
    ) -> None:
        """Overwrite the reply and like counters (reconciliation only).

        Args:
            comment_id: The comment ID
            reply_count: Recomputed reply count
            like_count: Recomputed like count
        """
        pass

    @abstractmethod
    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Atomically increment the reply counter by 1.

        Args:
            comment_id: The comment ID
        """
        pass

    @abstractmethod
    async def decrement_reply_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the reply counter by 1 (minimum 0).

        Args:
            comment_id: The comment ID
        """
        pass

    @abstractmethod
    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Atomically increment the like counter by 1.

        Args:
            comment_id: The comment ID
        """
        pass

    @abstractmethod
    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the like counter by 1 (minimum 0).

        Args:
            comment_id: The comment ID
        """
        pass
