"""Response models shared by comment use cases."""

from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel

from interaction.domain.model import Comment, EditHistoryEntry
from interaction.domain.service import AuthorContext, ProfileService
from interaction.domain.value import UserId


class EditHistoryItem(BaseModel):
    """Edit history entry in response."""

    previous_text: str
    editor_id: str
    edited_at: datetime
    reason: str | None

    @classmethod
    def from_domain(cls, entry: EditHistoryEntry) -> "EditHistoryItem":
        return cls(
            previous_text=entry.previous_text,
            editor_id=str(entry.editor_id),
            edited_at=entry.edited_at,
            reason=entry.reason,
        )


class CommentItem(BaseModel):
    """Comment item in response.

    Author fields are left empty for anonymous comments unless the viewer
    is the author.
    """

    comment_id: int
    content_id: str
    author_id: str | None
    text: str
    parent_id: int | None
    depth: int
    mentions: list[str]
    hashtags: list[str]
    media_urls: list[str]
    is_edited: bool
    edit_count: int
    edit_history: list[EditHistoryItem]
    status: str
    moderation_status: str
    reply_count: int
    like_count: int
    family_id: str | None
    generation_level: int | None
    cultural_tags: list[str]
    language_code: str | None
    is_anonymous: bool
    is_private: bool
    created_at: datetime
    updated_at: datetime

    # Decorations from the profile directory
    author_name: str | None = None
    author_avatar: str | None = None
    is_from_same_family: bool = False
    is_from_same_generation: bool = False
    relationship_to_viewer: str | None = None

    @classmethod
    def from_domain(
        cls,
        comment: Comment,
        viewer_id: Optional[UserId] = None,
        author: Optional[AuthorContext] = None,
    ) -> "CommentItem":
        """Convert a domain comment to a response item.

        Args:
            comment: Domain comment
            viewer_id: Viewing user
            author: Author context for the viewer, if available

        Returns:
            Response item
        """
        hide_author = comment.is_anonymous and comment.author_id != viewer_id
        author = None if hide_author else author or AuthorContext()

        return cls(
            comment_id=comment.id,
            content_id=str(comment.content_id),
            author_id=None if hide_author else str(comment.author_id),
            text=comment.text,
            parent_id=comment.parent_id,
            depth=comment.depth,
            mentions=[str(user_id) for user_id in comment.mentions],
            hashtags=comment.hashtags,
            media_urls=comment.media_urls,
            is_edited=comment.is_edited,
            edit_count=comment.edit_count,
            edit_history=[
                EditHistoryItem.from_domain(entry) for entry in comment.edit_history
            ],
            status=comment.status.value,
            moderation_status=comment.moderation_status.value,
            reply_count=comment.reply_count,
            like_count=comment.like_count,
            family_id=str(comment.family_id) if comment.family_id else None,
            generation_level=comment.generation_level,
            cultural_tags=comment.cultural_tags,
            language_code=comment.language_code,
            is_anonymous=comment.is_anonymous,
            is_private=comment.is_private,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            **(author.model_dump() if author else {}),
        )


async def describe_authors(
    profile_service: ProfileService,
    comments: Iterable[Comment],
    viewer_id: Optional[UserId],
) -> dict[UserId, AuthorContext]:
    """Look up author context for the non-anonymous authors of ``comments``."""
    author_ids = [c.author_id for c in comments if not c.is_anonymous]
    if not author_ids:
        return {}
    return await profile_service.describe_authors(author_ids, viewer_id)


def parse_user_id(value: str | None) -> Optional[UserId]:
    """Convert an optional UUID string to a user ID."""
    return UserId(UUID(value)) if value else None
