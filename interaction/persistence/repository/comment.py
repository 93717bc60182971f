"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from interaction.domain.model import Comment
from interaction.domain.model.comment import APPROVED_STATUSES
from interaction.domain.repository import CommentRepository
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    ModerationStatus,
)
from interaction.persistence.mappers import comment_to_dict, row_to_comment
from interaction.persistence.tables import comments_table

# Maintained only through atomic increments or set_counters
COUNTER_COLUMNS = frozenset({"reply_count", "like_count"})

VISIBLE_MODERATION_STATUSES = sorted(s.value for s in APPROVED_STATUSES)


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_children_of(
        self,
        parent_ids: Sequence[CommentId],
        limit_per_parent: Optional[int] = None,
    ) -> List[Comment]:
        """Find direct children of several comments in one query.

        The per-parent limit is applied with a row_number() window so a
        single wide node cannot pull its whole fan-out into memory.
        """
        if not parent_ids:
            return []

        ordering = (comments_table.c.created_at, comments_table.c.id)

        if limit_per_parent is None:
            stmt = (
                select(comments_table)
                .where(comments_table.c.parent_id.in_(parent_ids))
                .order_by(comments_table.c.parent_id, *ordering)
            )
        else:
            rank = (
                func.row_number()
                .over(partition_by=comments_table.c.parent_id, order_by=ordering)
                .label("sibling_rank")
            )
            ranked = (
                select(comments_table, rank)
                .where(comments_table.c.parent_id.in_(parent_ids))
                .subquery()
            )
            stmt = (
                select(*[ranked.c[column.name] for column in comments_table.columns])
                .where(ranked.c.sibling_rank <= limit_per_parent)
                .order_by(ranked.c.parent_id, ranked.c.created_at, ranked.c.id)
            )

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_top_level_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find top-level comments on a content item, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.content_id == content_id)
            .where(comments_table.c.parent_id.is_(None))
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_content(self, content_id: ContentId) -> List[Comment]:
        """Find every comment on a content item, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.content_id == content_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_replies(
        self,
        parent_id: CommentId,
        moderation_statuses: Optional[Sequence[ModerationStatus]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of ACTIVE direct replies, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
        )
        if moderation_statuses is not None:
            stmt = stmt.where(
                comments_table.c.moderation_status.in_(
                    [s.value for s in moderation_statuses]
                )
            )
        stmt = (
            stmt.order_by(comments_table.c.created_at, comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    def _visible_public(self):
        return and_(
            comments_table.c.status == CommentStatus.ACTIVE.value,
            comments_table.c.moderation_status.in_(VISIBLE_MODERATION_STATUSES),
            comments_table.c.is_private.is_(False),
        )

    async def _find_visible_page(self, condition, limit: int, offset: int) -> List[Comment]:
        stmt = (
            select(comments_table)
            .where(self._visible_public())
            .where(condition)
            .order_by(comments_table.c.created_at.desc(), comments_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_visible_by_generation(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> List[Comment]:
        """Find visible, non-private comments at a generation level, newest first."""
        return await self._find_visible_page(
            comments_table.c.generation_level == generation_level, limit, offset
        )

    async def find_visible_by_cultural_tag(
        self, cultural_tag: str, limit: int = 50, offset: int = 0
    ) -> List[Comment]:
        """Find visible, non-private comments carrying a cultural tag, newest first."""
        return await self._find_visible_page(
            comments_table.c.cultural_tags.any(cultural_tag), limit, offset
        )

    async def count_hashtags_since(
        self, since: datetime, limit: int
    ) -> List[Tuple[str, int]]:
        """Count hashtag use across visible comments created since ``since``.

        Hashtags are unnested in a subquery and grouped in the outer query.
        """
        tags = (
            select(func.unnest(comments_table.c.hashtags).label("hashtag"))
            .where(comments_table.c.status == CommentStatus.ACTIVE.value)
            .where(
                comments_table.c.moderation_status.in_(VISIBLE_MODERATION_STATUSES)
            )
            .where(comments_table.c.created_at >= since)
            .subquery()
        )
        uses = func.count().label("uses")
        stmt = (
            select(tags.c.hashtag, uses)
            .group_by(tags.c.hashtag)
            .order_by(uses.desc(), tags.c.hashtag)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row.hashtag, row.uses) for row in result.fetchall()]

    async def find_by_moderation_status(
        self,
        statuses: Sequence[ModerationStatus],
        limit: int = 50,
    ) -> List[Comment]:
        """Find non-deleted comments in the given moderation statuses."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.moderation_status.in_([s.value for s in statuses])
            )
            .where(comments_table.c.status != CommentStatus.DELETED.value)
            .order_by(comments_table.c.created_at, comments_table.c.id)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_live_children(self, parent_id: CommentId) -> int:
        """Count non-deleted direct children."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .where(comments_table.c.status != CommentStatus.DELETED.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (insert when it has no ID, replace otherwise)."""
        comment_dict = comment_to_dict(comment)

        if comment.id is None:
            stmt = comments_table.insert().values(**comment_dict)
        else:
            values = {k: v for k, v in comment_dict.items() if k not in COUNTER_COLUMNS}
            stmt = (
                update(comments_table)
                .where(comments_table.c.id == comment.id)
                .values(**values)
            )

        result = await self.session.execute(stmt.returning(comments_table))
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else comment

    async def set_counters(
        self, comment_id: CommentId, reply_count: int, like_count: int
    ) -> None:
        """Overwrite the reply and like counters."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(reply_count=reply_count, like_count=like_count)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def _adjust_counter(
        self, comment_id: CommentId, counter: str, delta: int
    ) -> None:
        column = comments_table.c[counter]
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values({counter: column + delta, "updated_at": datetime.now()})
        )
        if delta < 0:
            stmt = stmt.where(column > 0)  # Don't go below 0
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_reply_count(self, comment_id: CommentId) -> None:
        """Atomically increment the reply counter by 1."""
        await self._adjust_counter(comment_id, "reply_count", 1)

    async def decrement_reply_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the reply counter by 1 (minimum 0)."""
        await self._adjust_counter(comment_id, "reply_count", -1)

    async def increment_like_count(self, comment_id: CommentId) -> None:
        """Atomically increment the like counter by 1."""
        await self._adjust_counter(comment_id, "like_count", 1)

    async def decrement_like_count(self, comment_id: CommentId) -> None:
        """Atomically decrement the like counter by 1 (minimum 0)."""
        await self._adjust_counter(comment_id, "like_count", -1)
