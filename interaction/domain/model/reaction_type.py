"""Reaction type catalog.

A static, read-only lookup table from reaction type to its display
metadata and category. Category checks are lookups into this table.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from interaction.domain.value import ReactionCategory, ReactionType
from interaction.domain.value.common import ValueObject


class ReactionTypeInfo(ValueObject):
    """Display metadata for one reaction type."""

    reaction_type: ReactionType
    display_name: str
    icon: str
    color_code: str
    category: ReactionCategory


def _entry(
    reaction_type: ReactionType,
    display_name: str,
    icon: str,
    color_code: str,
    category: ReactionCategory,
) -> tuple[ReactionType, ReactionTypeInfo]:
    return reaction_type, ReactionTypeInfo(
        reaction_type=reaction_type,
        display_name=display_name,
        icon=icon,
        color_code=color_code,
        category=category,
    )


_CORE = ReactionCategory.CORE
_FAMILY = ReactionCategory.FAMILY
_GENERATIONAL = ReactionCategory.GENERATIONAL
_CULTURAL = ReactionCategory.CULTURAL

REACTION_CATALOG: Mapping[ReactionType, ReactionTypeInfo] = MappingProxyType(
    dict(
        [
            _entry(ReactionType.LIKE, "Like", "👍", "#4CAF50", _CORE),
            _entry(ReactionType.LOVE, "Love", "❤️", "#E91E63", _CORE),
            _entry(ReactionType.HEART, "Heart", "💖", "#F06292", _CORE),
            _entry(ReactionType.LAUGH, "Laugh", "😂", "#FF9800", _CORE),
            _entry(ReactionType.WOW, "Wow", "😮", "#9C27B0", _CORE),
            _entry(ReactionType.SAD, "Sad", "😢", "#607D8B", _CORE),
            _entry(ReactionType.ANGRY, "Angry", "😠", "#F44336", _CORE),
            _entry(ReactionType.BLESSING, "Blessing", "🙏", "#8BC34A", _FAMILY),
            _entry(ReactionType.PRIDE, "Pride", "🏆", "#FFC107", _FAMILY),
            _entry(ReactionType.GRATITUDE, "Gratitude", "🙏", "#4CAF50", _FAMILY),
            _entry(ReactionType.MEMORY, "Memory", "🧠", "#9E9E9E", _FAMILY),
            _entry(ReactionType.WISDOM, "Wisdom", "🧙‍♂️", "#795548", _FAMILY),
            _entry(ReactionType.TRADITION, "Tradition", "🏛️", "#3F51B5", _FAMILY),
            _entry(ReactionType.RESPECT, "Respect", "🙇‍♂️", "#795548", _FAMILY),
            _entry(ReactionType.HONOR, "Honor", "👑", "#FFD700", _FAMILY),
            _entry(ReactionType.LEGACY, "Legacy", "📜", "#8D6E63", _FAMILY),
            _entry(ReactionType.HERITAGE, "Heritage", "🏛️", "#5D4037", _FAMILY),
            _entry(
                ReactionType.GRANDPARENT, "Grandparent", "👴", "#9E9E9E", _GENERATIONAL
            ),
            _entry(ReactionType.PARENT, "Parent", "👨", "#607D8B", _GENERATIONAL),
            _entry(ReactionType.CHILD, "Child", "👶", "#FF9800", _GENERATIONAL),
            _entry(ReactionType.SIBLING, "Sibling", "👫", "#E91E63", _GENERATIONAL),
            _entry(ReactionType.NAMASTE, "Namaste", "🙏", "#4CAF50", _CULTURAL),
            _entry(ReactionType.OM, "Om", "🕉️", "#9C27B0", _CULTURAL),
            _entry(ReactionType.FESTIVAL, "Festival", "🎉", "#FF5722", _CULTURAL),
            _entry(ReactionType.PRAYER, "Prayer", "🙏", "#795548", _CULTURAL),
            _entry(ReactionType.RITUAL, "Ritual", "🕯️", "#3F51B5", _CULTURAL),
        ]
    )
)


def get_reaction_type_info(reaction_type: ReactionType) -> ReactionTypeInfo:
    """Look up display metadata for a reaction type."""
    return REACTION_CATALOG[reaction_type]


def is_in_category(reaction_type: ReactionType, category: ReactionCategory) -> bool:
    """Check whether a reaction type belongs to a category."""
    return REACTION_CATALOG[reaction_type].category == category


def list_reaction_types(
    category: Optional[ReactionCategory] = None,
) -> list[ReactionTypeInfo]:
    """List catalog entries in declaration order, optionally by category."""
    return [
        info
        for info in REACTION_CATALOG.values()
        if category is None or info.category == category
    ]
