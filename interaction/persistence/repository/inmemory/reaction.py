"""In-memory reaction repository for testing."""

from itertools import count
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError

from interaction.domain.model import Reaction
from interaction.domain.repository import ReactionRepository
from interaction.domain.value import ContentId, ReactionId, UserId


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing.

    Keyed by (content_id, user_id), mirroring the unique constraint.
    """

    def __init__(self) -> None:
        self._reactions: dict[tuple[ContentId, UserId], Reaction] = {}
        self._ids = count(1)

    async def find_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a content item."""
        return self._reactions.get((content_id, user_id))

    async def find_by_content(self, content_id: ContentId) -> list[Reaction]:
        """Find all reactions on a content item, oldest first."""
        return sorted(
            (r for r in self._reactions.values() if r.content_id == content_id),
            key=lambda r: (r.created_at, r.id),
        )

    def _public_page(
        self, matches: Callable[[Reaction], bool], limit: int, offset: int
    ) -> list[Reaction]:
        found = sorted(
            (r for r in self._reactions.values() if not r.is_private and matches(r)),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )
        return found[offset : offset + limit]

    async def find_by_generation_level(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> list[Reaction]:
        """Find non-private reactions at a generation level, newest first."""
        return self._public_page(
            lambda r: r.generation_level == generation_level, limit, offset
        )

    async def find_by_cultural_context(
        self, cultural_context: str, limit: int = 50, offset: int = 0
    ) -> list[Reaction]:
        """Find non-private reactions with a cultural context, newest first."""
        return self._public_page(
            lambda r: r.cultural_context == cultural_context, limit, offset
        )

    async def save(self, reaction: Reaction) -> Reaction:
        """Insert a new reaction.

        Raises:
            IntegrityError: If the user already reacted to the content
        """
        key = (reaction.content_id, reaction.user_id)
        if key in self._reactions:
            raise IntegrityError("Duplicate reaction", None, Exception())

        saved = reaction.model_copy(update={"id": ReactionId(next(self._ids))})
        self._reactions[key] = saved
        return saved

    async def update(self, reaction: Reaction) -> Optional[Reaction]:
        """Replace an existing reaction, matched by ID."""
        key = (reaction.content_id, reaction.user_id)
        current = self._reactions.get(key)
        if current is None or current.id != reaction.id:
            return None

        updated = reaction.model_copy(update={"created_at": current.created_at})
        self._reactions[key] = updated
        return updated

    async def delete_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> bool:
        """Delete a user's reaction on a content item."""
        return self._reactions.pop((content_id, user_id), None) is not None
