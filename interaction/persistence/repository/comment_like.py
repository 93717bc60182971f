"""PostgreSQL implementation of CommentLike repository."""

from typing import Optional

from sqlalchemy import and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from interaction.domain.model import CommentLike
from interaction.domain.repository import CommentLikeRepository
from interaction.domain.value import CommentId, UserId
from interaction.persistence.mappers import row_to_comment_like
from interaction.persistence.tables import comment_likes_table


class PostgresCommentLikeRepository(CommentLikeRepository):
    """PostgreSQL implementation of CommentLikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _pair(self, comment_id: CommentId, user_id: UserId):
        return and_(
            comment_likes_table.c.comment_id == comment_id,
            comment_likes_table.c.user_id == user_id,
        )

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        stmt = select(comment_likes_table).where(self._pair(comment_id, user_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_like(row._asdict()) if row else None

    async def save(self, like: CommentLike) -> CommentLike:
        """Insert a like.

        Runs in a savepoint so a duplicate only rolls back this insert.

        Raises:
            IntegrityError: If the user already liked the comment
        """
        stmt = (
            comment_likes_table.insert()
            .values(
                comment_id=like.comment_id,
                user_id=like.user_id,
                created_at=like.created_at,
            )
            .returning(comment_likes_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_comment_like(row._asdict()) if row else like

    async def delete_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> bool:
        """Delete a user's like on a comment."""
        stmt = delete(comment_likes_table).where(self._pair(comment_id, user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
