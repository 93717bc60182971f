"""Upsert reaction use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from interaction.domain.service import ReactionService
from interaction.domain.value import ContentId, FamilyId, ReactionType, UserId

from .common import ReactionItem


class UpsertReactionRequest(BaseModel):
    """Upsert reaction request.

    Intensity is range-checked by the reaction service so that an
    out-of-range value surfaces as a domain validation error.
    """

    content_id: str  # UUID string
    user_id: str  # User ID from the actor header
    reaction_type: ReactionType
    intensity: int = 1
    family_id: str | None = None
    generation_level: int | None = None
    family_context: dict[str, Any] | None = None
    relationship_context: dict[str, Any] | None = None
    emotional_context: dict[str, Any] | None = None
    cultural_context: str | None = None
    is_anonymous: bool = False
    is_private: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpsertReactionResponse(BaseModel):
    """Upsert reaction response."""

    reaction: ReactionItem
    created: bool


class UpsertReactionUseCase:
    """Use case for reacting to content (or changing an existing reaction)."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize upsert reaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: UpsertReactionRequest) -> UpsertReactionResponse:
        """Execute upsert reaction flow.

        Args:
            request: Upsert reaction request

        Returns:
            The stored reaction and whether it was newly created

        Raises:
            ValidationError: If intensity is out of range
            ConflictError: If a concurrent change could not be resolved
        """
        reaction, created = await self.reaction_service.upsert_reaction(
            content_id=ContentId(UUID(request.content_id)),
            user_id=UserId(UUID(request.user_id)),
            reaction_type=request.reaction_type,
            intensity=request.intensity,
            family_id=FamilyId(UUID(request.family_id)) if request.family_id else None,
            generation_level=request.generation_level,
            family_context=request.family_context,
            relationship_context=request.relationship_context,
            emotional_context=request.emotional_context,
            cultural_context=request.cultural_context,
            is_anonymous=request.is_anonymous,
            is_private=request.is_private,
            metadata=request.metadata,
        )
        return UpsertReactionResponse(
            reaction=ReactionItem.from_domain(reaction), created=created
        )
