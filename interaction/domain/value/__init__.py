"""Domain value objects for the interaction service."""

from interaction.domain.value.identifiers import (
    CommentId,
    CommentLikeId,
    ContentId,
    EventId,
    FamilyId,
    ReactionId,
    UserId,
)
from interaction.domain.value.types import (
    CommentStatus,
    EventPriority,
    EventType,
    IntensityLevel,
    InteractionType,
    ModerationDecision,
    ModerationStatus,
    ReactionCategory,
    ReactionType,
)

__all__ = [
    # Identifiers
    "CommentId",
    "CommentLikeId",
    "ReactionId",
    "UserId",
    "ContentId",
    "FamilyId",
    "EventId",
    # Types
    "CommentStatus",
    "ModerationStatus",
    "ModerationDecision",
    "ReactionCategory",
    "ReactionType",
    "IntensityLevel",
    "EventType",
    "InteractionType",
    "EventPriority",
]
