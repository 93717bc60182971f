"""Reaction summary read model.

Result of aggregating every reaction on a content item. Percentages are
relative to the total reaction count and kept at full precision.
"""

from datetime import datetime
from typing import Optional, Union

from interaction.domain.value import (
    FamilyId,
    ReactionCategory,
    ReactionId,
    ReactionType,
)
from interaction.domain.value.common import ValueObject

BreakdownKey = Union[ReactionType, ReactionCategory, FamilyId, int, str, None]


class BreakdownEntry(ValueObject):
    """Count and share of reactions for one value of a dimension.

    A ``None`` key collects reactions that carry no value for the dimension.
    """

    key: BreakdownKey
    label: str
    count: int
    percentage: float


class FamilyBreakdown(ValueObject):
    """Reactions from one family, nested by generation level."""

    family_id: Optional[FamilyId]
    count: int
    percentage: float
    by_generation: list[BreakdownEntry]


class ViewerReaction(ValueObject):
    """The viewing user's own reaction."""

    reaction_id: ReactionId
    reaction_type: ReactionType
    intensity: int
    created_at: datetime


class ReactionSummary(ValueObject):
    """Multi-dimensional summary of the reactions on a content item."""

    total_reactions: int
    unique_reactors: int
    average_intensity: float
    by_type: list[BreakdownEntry]
    by_intensity: list[BreakdownEntry]
    by_generation: list[BreakdownEntry]
    by_cultural_tag: list[BreakdownEntry]
    by_family: list[FamilyBreakdown]
    by_category: list[BreakdownEntry]
    viewer_reaction: Optional[ViewerReaction] = None
