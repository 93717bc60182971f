"""Reaction entity.

A reaction is a user's typed, weighted response to a piece of content.
There is exactly one reaction per (content, user) pair: reacting again
replaces the type and intensity of the existing row.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from interaction.domain.model.common import DomainModel
from interaction.domain.model.reaction_type import get_reaction_type_info
from interaction.domain.value import (
    ContentId,
    FamilyId,
    IntensityLevel,
    ReactionCategory,
    ReactionId,
    ReactionType,
    UserId,
)

MIN_INTENSITY = 1
MAX_INTENSITY = 5


def intensity_level(intensity: int) -> IntensityLevel:
    """Band an intensity value into LOW (1-2), MEDIUM (3) or HIGH (4-5)."""
    if intensity <= 2:
        return IntensityLevel.LOW
    if intensity == 3:
        return IntensityLevel.MEDIUM
    return IntensityLevel.HIGH


class Reaction(DomainModel):
    """Reaction entity."""

    id: Optional[ReactionId] = None  # Assigned by the store on insert
    content_id: ContentId
    user_id: UserId
    reaction_type: ReactionType
    intensity: int = Field(default=1, ge=MIN_INTENSITY, le=MAX_INTENSITY)

    # Family context
    family_id: Optional[FamilyId] = None
    generation_level: Optional[int] = None
    family_context: Optional[dict[str, Any]] = None
    relationship_context: Optional[dict[str, Any]] = None
    cultural_context: Optional[str] = None  # Cultural tag used for aggregation
    emotional_context: Optional[dict[str, Any]] = None

    is_anonymous: bool = False
    is_private: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def category(self) -> ReactionCategory:
        return get_reaction_type_info(self.reaction_type).category

    @property
    def is_high_intensity(self) -> bool:
        return self.intensity >= 4

    @property
    def is_low_intensity(self) -> bool:
        return self.intensity <= 2

    @property
    def intensity_level(self) -> IntensityLevel:
        return intensity_level(self.intensity)
