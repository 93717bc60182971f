"""In-memory comment repository for testing."""

from collections import Counter, defaultdict
from datetime import datetime
from itertools import count
from typing import Callable, Optional, Sequence

from interaction.domain.model import Comment
from interaction.domain.repository import CommentRepository
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    ModerationStatus,
)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Keeps an index from parent ID to child IDs so thread expansion only
    touches the requested subtree.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._children: dict[CommentId, list[CommentId]] = defaultdict(list)
        self._ids = count(1)

    def _sorted(self, comments: Sequence[Comment]) -> list[Comment]:
        return sorted(comments, key=lambda c: (c.created_at, c.id))

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_children_of(
        self,
        parent_ids: Sequence[CommentId],
        limit_per_parent: Optional[int] = None,
    ) -> list[Comment]:
        """Find direct children of several comments."""
        children: list[Comment] = []
        for parent_id in sorted(set(parent_ids)):
            siblings = self._sorted(
                [self._comments[child_id] for child_id in self._children.get(parent_id, [])]
            )
            children.extend(siblings[:limit_per_parent])
        return children

    async def find_top_level_by_content(self, content_id: ContentId) -> list[Comment]:
        """Find top-level comments on a content item, oldest first."""
        return self._sorted(
            [
                c
                for c in self._comments.values()
                if c.content_id == content_id and c.parent_id is None
            ]
        )

    async def find_by_content(self, content_id: ContentId) -> list[Comment]:
        """Find every comment on a content item, oldest first."""
        return self._sorted(
            [c for c in self._comments.values() if c.content_id == content_id]
        )

    async def find_replies(
        self,
        parent_id: CommentId,
        moderation_statuses: Optional[Sequence[ModerationStatus]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """Find one page of ACTIVE direct replies, oldest first."""
        replies = self._sorted(
            [
                reply
                for reply in (
                    self._comments[child_id]
                    for child_id in self._children.get(parent_id, [])
                )
                if reply.status == CommentStatus.ACTIVE
                and (
                    moderation_statuses is None
                    or reply.moderation_status in moderation_statuses
                )
            ]
        )
        return replies[offset : offset + limit]

    def _visible_page(
        self, matches: Callable[[Comment], bool], limit: int, offset: int
    ) -> list[Comment]:
        found = sorted(
            (
                c
                for c in self._comments.values()
                if c.is_visible and not c.is_private and matches(c)
            ),
            key=lambda c: (c.created_at, c.id),
            reverse=True,
        )
        return found[offset : offset + limit]

    async def find_visible_by_generation(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> list[Comment]:
        """Find visible, non-private comments at a generation level, newest first."""
        return self._visible_page(
            lambda c: c.generation_level == generation_level, limit, offset
        )

    async def find_visible_by_cultural_tag(
        self, cultural_tag: str, limit: int = 50, offset: int = 0
    ) -> list[Comment]:
        """Find visible, non-private comments carrying a cultural tag, newest first."""
        return self._visible_page(
            lambda c: cultural_tag in c.cultural_tags, limit, offset
        )

    async def count_hashtags_since(
        self, since: datetime, limit: int
    ) -> list[tuple[str, int]]:
        """Count hashtag use across visible comments created since ``since``."""
        uses = Counter(
            hashtag
            for c in self._comments.values()
            if c.is_visible and c.created_at >= since
            for hashtag in c.hashtags
        )
        return sorted(uses.items(), key=lambda item: (-item[1], item[0]))[:limit]

    async def find_by_moderation_status(
        self,
        statuses: Sequence[ModerationStatus],
        limit: int = 50,
    ) -> list[Comment]:
        """Find non-deleted comments in the given moderation statuses."""
        return self._sorted(
            [
                c
                for c in self._comments.values()
                if c.moderation_status in statuses and not c.is_deleted
            ]
        )[:limit]

    async def count_live_children(self, parent_id: CommentId) -> int:
        """Count non-deleted direct children."""
        return sum(
            1
            for child_id in self._children.get(parent_id, [])
            if not self._comments[child_id].is_deleted
        )

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (insert when it has no ID, replace otherwise).

        Stored counters win over the incoming ones on replace.
        """
        if comment.id is None:
            comment = comment.model_copy(update={"id": CommentId(next(self._ids))})
            if comment.parent_id is not None:
                self._children[comment.parent_id].append(comment.id)
        elif comment.id in self._comments:
            stored = self._comments[comment.id]
            comment = comment.model_copy(
                update={
                    "reply_count": stored.reply_count,
                    "like_count": stored.like_count,
                }
            )
        self._comments[comment.id] = comment
        return comment

    async def set_counters(
        self, comment_id: CommentId, reply_count: int, like_count: int
    ) -> None:
        """Overwrite the reply and like counters."""
        comment = self._comments.get(comment_id)
        if comment is not None:
            self._comments[comment_id] = comment.model_copy(
                update={"reply_count": reply_count, "like_count": like_count}
            )

    def _adjust(self, comment_id: CommentId, counter: str, delta: int) -> None:
        comment = self._comments.get(comment_id)
        if comment is None:
            return
        value = max(0, getattr(comment, counter) + delta)
        self._comments[comment_id] = comment.model_copy(update={counter: value})

    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Increment the reply counter by 1."""
        self._adjust(comment_id, "reply_count", 1)

    async def decrement_reply_count(self, comment_id: CommentId) -> None:
        """Decrement the reply counter by 1 (minimum 0)."""
        self._adjust(comment_id, "reply_count", -1)

    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Increment the like counter by 1."""
        self._adjust(comment_id, "like_count", 1)

    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Decrement the like counter by 1 (minimum 0)."""
        self._adjust(comment_id, "like_count", -1)
