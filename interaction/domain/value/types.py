"""Domain value types for comments, reactions and interaction events."""

from enum import Enum


class CommentStatus(str, Enum):
    """Visibility status of a comment.

    ACTIVE is the only non-terminal status.
    """

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"
    HIDDEN = "HIDDEN"
    ARCHIVED = "ARCHIVED"


class ModerationStatus(str, Enum):
    """Moderation status of a comment."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FLAGGED = "FLAGGED"
    AUTO_APPROVED = "AUTO_APPROVED"


class ModerationDecision(str, Enum):
    """Outcome a moderator can apply to a comment."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReactionCategory(str, Enum):
    """Grouping tag carried by every reaction type."""

    CORE = "CORE"
    FAMILY = "FAMILY"
    GENERATIONAL = "GENERATIONAL"
    CULTURAL = "CULTURAL"


class ReactionType(str, Enum):
    """Closed set of reaction types.

    Display metadata and category live in the reaction type catalog.
    """

    # Core
    LIKE = "LIKE"
    LOVE = "LOVE"
    HEART = "HEART"
    LAUGH = "LAUGH"
    WOW = "WOW"
    SAD = "SAD"
    ANGRY = "ANGRY"

    # Family
    BLESSING = "BLESSING"
    PRIDE = "PRIDE"
    GRATITUDE = "GRATITUDE"
    MEMORY = "MEMORY"
    WISDOM = "WISDOM"
    TRADITION = "TRADITION"
    RESPECT = "RESPECT"
    HONOR = "HONOR"
    LEGACY = "LEGACY"
    HERITAGE = "HERITAGE"

    # Generational
    GRANDPARENT = "GRANDPARENT"
    PARENT = "PARENT"
    CHILD = "CHILD"
    SIBLING = "SIBLING"

    # Cultural
    NAMASTE = "NAMASTE"
    OM = "OM"
    FESTIVAL = "FESTIVAL"
    PRAYER = "PRAYER"
    RITUAL = "RITUAL"


class IntensityLevel(str, Enum):
    """Coarse band of a reaction intensity."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class EventType(str, Enum):
    """Kinds of interaction events.

    The prefix (COMMENT_ / REACTION_) selects the kind-specific channel.
    """

    COMMENT_CREATED = "COMMENT_CREATED"
    COMMENT_UPDATED = "COMMENT_UPDATED"
    COMMENT_DELETED = "COMMENT_DELETED"
    COMMENT_LIKED = "COMMENT_LIKED"
    COMMENT_UNLIKED = "COMMENT_UNLIKED"
    COMMENT_FLAGGED = "COMMENT_FLAGGED"
    COMMENT_MODERATED = "COMMENT_MODERATED"
    REACTION_ADDED = "REACTION_ADDED"
    REACTION_UPDATED = "REACTION_UPDATED"
    REACTION_REMOVED = "REACTION_REMOVED"


class InteractionType(str, Enum):
    """Interaction kind tag carried by events."""

    COMMENT = "COMMENT"
    REACTION = "REACTION"
    LIKE = "LIKE"
    FLAG = "FLAG"
    MODERATION = "MODERATION"


class EventPriority(str, Enum):
    """Delivery priority hint placed in event metadata."""

    NORMAL = "normal"
    HIGH = "high"

