"""Profile decoration service.

Looks up author profiles and family relationships from the external
directory to decorate responses. Directory data is never used to enforce
invariants, and a directory outage only leaves responses undecorated.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

import logfire

from interaction.domain.value import FamilyId, UserId
from interaction.domain.value.common import ValueObject

from .base import Service


class UserProfile(ValueObject):
    """Profile snapshot returned by the directory."""

    user_id: UserId
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    generation_level: Optional[int] = None
    family_ids: list[FamilyId] = []


class AuthorContext(ValueObject):
    """How an author relates to the viewing user."""

    author_name: Optional[str] = None
    author_avatar: Optional[str] = None
    is_from_same_family: bool = False
    is_from_same_generation: bool = False
    relationship_to_viewer: Optional[str] = None


class ProfileLookupError(Exception):
    """Raised by directory implementations when a lookup cannot be served."""

    pass


class ProfileDirectory(ABC):
    """User profile and family graph directory interface."""

    @abstractmethod
    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Fetch a user's profile.

        Args:
            user_id: User to look up

        Returns:
            Profile if the user is known, None otherwise

        Raises:
            ProfileLookupError: If the directory cannot be reached
        """
        pass

    @abstractmethod
    async def get_relationship(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[str]:
        """Fetch the relationship label of ``other_id`` as seen by ``user_id``.

        Args:
            user_id: Viewing user
            other_id: Other user

        Returns:
            Relationship label (e.g. "grandmother"), or None if unrelated

        Raises:
            ProfileLookupError: If the directory cannot be reached
        """
        pass


class ProfileService(Service):
    """Domain service for decorating content with author context."""

    def __init__(self, directory: ProfileDirectory) -> None:
        """Initialize profile service.

        Args:
            directory: Profile directory collaborator
        """
        self.directory = directory

    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Fetch a profile, treating directory failures as unknown users."""
        try:
            return await self.directory.get_profile(user_id)
        except ProfileLookupError as e:
            logfire.warn("Profile lookup failed", user_id=str(user_id), error=str(e))
            return None

    async def describe_authors(
        self, author_ids: Iterable[UserId], viewer_id: Optional[UserId]
    ) -> dict[UserId, AuthorContext]:
        """Build author context for each distinct author.

        Same family means the two profiles share a family ID. Same
        generation means both profiles report the same generation level.

        Args:
            author_ids: Authors to describe
            viewer_id: Viewing user (None for anonymous viewers)

        Returns:
            Mapping of author ID to context
        """
        unique_ids = list(dict.fromkeys(author_ids))
        with logfire.span(
            "profile_service.describe_authors",
            author_count=len(unique_ids),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            viewer = await self.get_profile(viewer_id) if viewer_id else None
            contexts: dict[UserId, AuthorContext] = {}

            for author_id in unique_ids:
                author = await self.get_profile(author_id)
                if author is None:
                    contexts[author_id] = AuthorContext()
                    continue

                same_family = bool(
                    viewer and set(viewer.family_ids) & set(author.family_ids)
                )
                same_generation = (
                    viewer is not None
                    and viewer.generation_level is not None
                    and viewer.generation_level == author.generation_level
                )

                relationship = None
                if viewer_id and viewer_id != author_id:
                    try:
                        relationship = await self.directory.get_relationship(
                            viewer_id, author_id
                        )
                    except ProfileLookupError as e:
                        logfire.warn(
                            "Relationship lookup failed",
                            viewer_id=str(viewer_id),
                            author_id=str(author_id),
                            error=str(e),
                        )

                contexts[author_id] = AuthorContext(
                    author_name=author.display_name,
                    author_avatar=author.avatar_url,
                    is_from_same_family=same_family,
                    is_from_same_generation=same_generation,
                    relationship_to_viewer=relationship,
                )

            return contexts
