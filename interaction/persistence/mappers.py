"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from interaction.domain.model import Comment, CommentLike, EditHistoryEntry, Reaction
from interaction.domain.value import (
    CommentId,
    CommentLikeId,
    CommentStatus,
    ModerationStatus,
    ReactionId,
    ReactionType,
)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        content_id=row["content_id"],
        author_id=row["author_id"],
        text=row["text"],
        parent_id=CommentId(row["parent_id"]) if row.get("parent_id") else None,
        depth=row["depth"],
        mentions=row.get("mentions") or [],
        hashtags=row.get("hashtags") or [],
        media_urls=row.get("media_urls") or [],
        is_edited=row["is_edited"],
        edit_count=row["edit_count"],
        edit_history=[
            EditHistoryEntry.model_validate(entry)
            for entry in row.get("edit_history") or []
        ],
        status=CommentStatus(row["status"]),
        moderation_status=ModerationStatus(row["moderation_status"]),
        reply_count=row["reply_count"],
        like_count=row["like_count"],
        family_id=row.get("family_id"),
        generation_level=row.get("generation_level"),
        family_context=row.get("family_context"),
        relationship_context=row.get("relationship_context"),
        cultural_tags=row.get("cultural_tags") or [],
        sentiment_score=row.get("sentiment_score"),
        language_code=row.get("language_code"),
        is_anonymous=row["is_anonymous"],
        is_private=row["is_private"],
        metadata=row.get("metadata") or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    The ID is left out: it is assigned by the database on insert and used
    only in the WHERE clause on update.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump(exclude={"id", "edit_history"})
    data["status"] = comment.status.value
    data["moderation_status"] = comment.moderation_status.value
    # JSONB column: datetimes must be serialized
    data["edit_history"] = [
        entry.model_dump(mode="json") for entry in comment.edit_history
    ]
    return data


def row_to_comment_like(row: Dict[str, Any]) -> CommentLike:
    """Convert database row to CommentLike domain model."""
    return CommentLike(
        id=CommentLikeId(row["id"]),
        comment_id=CommentId(row["comment_id"]),
        user_id=row["user_id"],
        created_at=row["created_at"],
    )


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert database row to Reaction domain model.

    Args:
        row: Database row as dict

    Returns:
        Reaction domain model
    """
    return Reaction(
        id=ReactionId(row["id"]),
        content_id=row["content_id"],
        user_id=row["user_id"],
        reaction_type=ReactionType(row["reaction_type"]),
        intensity=row["intensity"],
        family_id=row.get("family_id"),
        generation_level=row.get("generation_level"),
        family_context=row.get("family_context"),
        relationship_context=row.get("relationship_context"),
        cultural_context=row.get("cultural_context"),
        emotional_context=row.get("emotional_context"),
        is_anonymous=row["is_anonymous"],
        is_private=row["is_private"],
        metadata=row.get("metadata") or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reaction_to_dict(reaction: Reaction) -> Dict[str, Any]:
    """Convert Reaction domain model to database dict (without ID).

    Args:
        reaction: Reaction domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = reaction.model_dump(exclude={"id"})
    data["reaction_type"] = reaction.reaction_type.value
    return data
