"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from interaction.domain.model.reaction import Reaction
from interaction.domain.value import ContentId, UserId


class ReactionRepository(ABC):
    """Repository for Reaction entity.

    The store enforces a unique constraint on (content_id, user_id).
    """

    @abstractmethod
    async def find_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> Optional[Reaction]:
        """Find a user's reaction on a content item.

        Args:
            content_id: The content ID
            user_id: The user's ID

        Returns:
            The reaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_content(self, content_id: ContentId) -> List[Reaction]:
        """Find all reactions on a content item.

        Args:
            content_id: The content ID

        Returns:
            Reactions ordered by creation time ascending
        """
        pass

    @abstractmethod
    async def find_by_generation_level(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> List[Reaction]:
        """Find non-private reactions made at a generation level.

        Args:
            generation_level: Generation level to match
            limit: Page size
            offset: Number of reactions to skip

        Returns:
            Reactions newest first
        """
        pass

    @abstractmethod
    async def find_by_cultural_context(
        self, cultural_context: str, limit: int = 50, offset: int = 0
    ) -> List[Reaction]:
        """Find non-private reactions tagged with a cultural context.

        Args:
            cultural_context: Cultural tag to match
            limit: Page size
            offset: Number of reactions to skip

        Returns:
            Reactions newest first
        """
        pass

    @abstractmethod
    async def save(self, reaction: Reaction) -> Reaction:
        """Insert a new reaction.

        Args:
            reaction: The reaction to insert (without ID)

        Returns:
            The saved reaction with its ID assigned

        Raises:
            IntegrityError: If the user already reacted to the content
        """
        pass

    @abstractmethod
    async def update(self, reaction: Reaction) -> Optional[Reaction]:
        """Replace the mutable fields of an existing reaction.

        Args:
            reaction: The reaction with its ID set

        Returns:
            The updated reaction, or None if the row no longer exists
        """
        pass

    @abstractmethod
    async def delete_by_content_and_user(
        self, content_id: ContentId, user_id: UserId
    ) -> bool:
        """Delete a user's reaction on a content item.

        Args:
            content_id: The content ID
            user_id: The user's ID

        Returns:
            True if a reaction was deleted, False if none existed
        """
        pass
