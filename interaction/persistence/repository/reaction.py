"""PostgreSQL implementation of Reaction repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from interaction.domain.model import Reaction
from interaction.domain.repository import ReactionRepository
from interaction.domain.value import ContentId, UserId
from interaction.persistence.mappers import reaction_to_dict, row_to_reaction
from interaction.persistence.tables import reactions_table


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _pair(self, content_id: ContentId, user_id: UserId):
        return and_(
            reactions_table.c.content_id == content_id,
            reactions_table.c.user_id == user_id,
        )

    async def find_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a content item."""
        stmt = select(reactions_table).where(self._pair(content_id, user_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reaction(row._asdict()) if row else None

    async def find_by_content(self, content_id: ContentId) -> List[Reaction]:
        """Find all reactions on a content item, oldest first."""
        stmt = (
            select(reactions_table)
            .where(reactions_table.c.content_id == content_id)
            .order_by(reactions_table.c.created_at, reactions_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction(row._asdict()) for row in result.fetchall()]

    async def _find_public_page(
        self, condition, limit: int, offset: int
    ) -> List[Reaction]:
        stmt = (
            select(reactions_table)
            .where(condition)
            .where(reactions_table.c.is_private.is_(False))
            .order_by(reactions_table.c.created_at.desc(), reactions_table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction(row._asdict()) for row in result.fetchall()]

    async def find_by_generation_level(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> List[Reaction]:
        """Find non-private reactions at a generation level, newest first."""
        return await self._find_public_page(
            reactions_table.c.generation_level == generation_level, limit, offset
        )

    async def find_by_cultural_context(
        self, cultural_context: str, limit: int = 50, offset: int = 0
    ) -> List[Reaction]:
        """Find non-private reactions with a cultural context, newest first."""
        return await self._find_public_page(
            reactions_table.c.cultural_context == cultural_context, limit, offset
        )

    async def save(self, reaction: Reaction) -> Reaction:
        """Insert a new reaction.

        Runs in a savepoint so that a unique violation from a concurrent
        upsert leaves the surrounding transaction usable for the retry.

        Raises:
            IntegrityError: If the user already reacted to the content
        """
        stmt = (
            reactions_table.insert()
            .values(**reaction_to_dict(reaction))
            .returning(reactions_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_reaction(row._asdict()) if row else reaction

    async def update(self, reaction: Reaction) -> Optional[Reaction]:
        """Replace the mutable fields of an existing reaction."""
        values = reaction_to_dict(reaction)
        # Identity and creation time never change
        for key in ("content_id", "user_id", "created_at"):
            values.pop(key)

        stmt = (
            update(reactions_table)
            .where(reactions_table.c.id == reaction.id)
            .values(**values)
            .returning(reactions_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_reaction(row._asdict()) if row else None

    async def delete_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> bool:
        """Delete a user's reaction on a content item."""
        stmt = delete(reactions_table).where(self._pair(content_id, user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
