"""Response models shared by reaction use cases."""

from datetime import datetime

from pydantic import BaseModel

from interaction.domain.model import Reaction


class ReactionItem(BaseModel):
    """Reaction item in response."""

    reaction_id: int
    content_id: str
    user_id: str | None  # Hidden for anonymous reactions
    reaction_type: str
    category: str
    intensity: int
    intensity_level: str
    family_id: str | None
    generation_level: int | None
    cultural_context: str | None
    is_anonymous: bool
    is_private: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, reaction: Reaction) -> "ReactionItem":
        return cls(
            reaction_id=reaction.id,
            content_id=str(reaction.content_id),
            user_id=None if reaction.is_anonymous else str(reaction.user_id),
            reaction_type=reaction.reaction_type.value,
            category=reaction.category.value,
            intensity=reaction.intensity,
            intensity_level=reaction.intensity_level.value,
            family_id=str(reaction.family_id) if reaction.family_id else None,
            generation_level=reaction.generation_level,
            cultural_context=reaction.cultural_context,
            is_anonymous=reaction.is_anonymous,
            is_private=reaction.is_private,
            created_at=reaction.created_at,
            updated_at=reaction.updated_at,
        )
