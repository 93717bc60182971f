"""Comment entity.

Comments form a self-referential tree on a piece of shared content. Each
comment carries two independent lifecycle axes: a visibility status
(ACTIVE, DELETED, ...) and a moderation status (PENDING, APPROVED, ...).
Only ACTIVE comments with an approved moderation status are shown to
regular readers.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, model_validator

from interaction.domain.model.common import DomainModel
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    FamilyId,
    ModerationStatus,
    UserId,
)

APPROVED_STATUSES = frozenset(
    {ModerationStatus.APPROVED, ModerationStatus.AUTO_APPROVED}
)


class EditHistoryEntry(DomainModel):
    """One entry of a comment's append-only edit log."""

    previous_text: str
    editor_id: UserId
    edited_at: datetime
    reason: Optional[str] = None


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a piece of content or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 for replies)

    reply_count and like_count are denormalized caches that
    are maintained together with the rows they count.
    """

    id: Optional[CommentId] = None  # Assigned by the store on insert
    content_id: ContentId
    author_id: UserId
    text: str = Field(min_length=1)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)

    mentions: list[UserId] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    media_urls: list[str] = Field(default_factory=list)

    is_edited: bool = False
    edit_count: int = Field(default=0, ge=0)
    edit_history: list[EditHistoryEntry] = Field(default_factory=list)

    status: CommentStatus = CommentStatus.ACTIVE
    moderation_status: ModerationStatus = ModerationStatus.PENDING

    reply_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)

    # Family context
    family_id: Optional[FamilyId] = None
    generation_level: Optional[int] = None
    family_context: Optional[dict[str, Any]] = None
    relationship_context: Optional[dict[str, Any]] = None
    cultural_tags: list[str] = Field(default_factory=list)

    sentiment_score: Optional[float] = None  # Advisory, computed elsewhere
    language_code: Optional[str] = Field(default=None, max_length=5)
    is_anonymous: bool = False
    is_private: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_consistency(self) -> "Comment":
        """Enforce edit log and threading invariants."""
        if self.edit_count != len(self.edit_history):
            raise ValueError("edit_count must equal the number of edit history entries")
        if self.is_edited != (self.edit_count > 0):
            raise ValueError("is_edited must be set exactly when edit_count > 0")
        if self.parent_id is None and self.depth != 0:
            raise ValueError("Top-level comments must have depth 0")
        if self.parent_id is not None and self.depth == 0:
            raise ValueError("Replies must have depth >= 1")
        return self

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @property
    def is_deleted(self) -> bool:
        return self.status == CommentStatus.DELETED

    @property
    def is_approved(self) -> bool:
        return self.moderation_status in APPROVED_STATUSES

    @property
    def is_visible(self) -> bool:
        """Whether a regular reader may see this comment."""
        return self.status == CommentStatus.ACTIVE and self.is_approved

    @property
    def requires_moderation(self) -> bool:
        return self.moderation_status in (
            ModerationStatus.PENDING,
            ModerationStatus.FLAGGED,
        )

    @property
    def has_replies(self) -> bool:
        return self.reply_count > 0

    def with_edit(
        self,
        new_text: str,
        editor_id: UserId,
        reason: Optional[str] = None,
        edited_at: Optional[datetime] = None,
    ) -> "Comment":
        """Return a copy with ``new_text`` and the previous text logged.

        Args:
            new_text: Replacement text
            editor_id: User performing the edit
            reason: Optional reason recorded in the history entry
            edited_at: Edit timestamp (defaults to now)

        Returns:
            Updated comment
        """
        edited_at = edited_at or datetime.now()
        entry = EditHistoryEntry(
            previous_text=self.text,
            editor_id=editor_id,
            edited_at=edited_at,
            reason=reason,
        )
        history = [*self.edit_history, entry]
        # model_copy skips validation, so rebuild to keep the invariants checked
        return Comment.model_validate(
            {
                **self.model_dump(),
                "text": new_text,
                "edit_history": history,
                "edit_count": len(history),
                "is_edited": True,
                "updated_at": edited_at,
            }
        )
