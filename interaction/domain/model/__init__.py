"""Domain model entities for the interaction service."""

from interaction.domain.model.comment import Comment, EditHistoryEntry
from interaction.domain.model.comment_like import CommentLike
from interaction.domain.model.comment_statistics import (
    CommentStatistics,
    HashtagCount,
    MentionCount,
)
from interaction.domain.model.event import InteractionEvent
from interaction.domain.model.reaction import Reaction
from interaction.domain.model.reaction_summary import (
    BreakdownEntry,
    FamilyBreakdown,
    ReactionSummary,
    ViewerReaction,
)
from interaction.domain.model.reaction_type import ReactionTypeInfo

__all__ = [
    "Comment",
    "EditHistoryEntry",
    "CommentLike",
    "CommentStatistics",
    "HashtagCount",
    "MentionCount",
    "Reaction",
    "ReactionTypeInfo",
    "ReactionSummary",
    "BreakdownEntry",
    "FamilyBreakdown",
    "ViewerReaction",
    "InteractionEvent",
]
