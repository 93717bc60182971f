"""Unit tests for the Comment entity."""

from datetime import datetime
from uuid import uuid4

import pydantic
import pytest

from interaction.application.usecase.comment import CommentItem
from interaction.domain.model import Comment, EditHistoryEntry
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    ModerationStatus,
    UserId,
)


def make_comment(**overrides) -> Comment:
    fields = {
        "content_id": ContentId(uuid4()),
        "author_id": UserId(uuid4()),
        "text": "Hello family",
    }
    fields.update(overrides)
    return Comment(**fields)


class TestCommentConsistency:
    """Tests for the Comment model validator."""

    def test_top_level_defaults(self):
        comment = make_comment()

        assert comment.depth == 0
        assert comment.is_top_level
        assert comment.status == CommentStatus.ACTIVE
        assert comment.moderation_status == ModerationStatus.PENDING
        assert not comment.is_visible

    def test_counters_are_replies_and_likes_only(self):
        """Reactions attach to content, so comments keep no reaction counter."""
        comment = make_comment()

        assert comment.reply_count == 0
        assert comment.like_count == 0
        assert "reaction_count" not in Comment.model_fields
        assert "reaction_count" not in CommentItem.model_fields

    def test_top_level_with_depth_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_comment(depth=2)

    def test_reply_with_zero_depth_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            make_comment(parent_id=CommentId(1), depth=0)

    def test_edit_count_must_match_history(self):
        with pytest.raises(pydantic.ValidationError):
            make_comment(edit_count=1, is_edited=True)

    def test_is_edited_requires_edits(self):
        with pytest.raises(pydantic.ValidationError):
            make_comment(is_edited=True)

    @pytest.mark.parametrize(
        "moderation_status,visible",
        [
            (ModerationStatus.PENDING, False),
            (ModerationStatus.APPROVED, True),
            (ModerationStatus.AUTO_APPROVED, True),
            (ModerationStatus.REJECTED, False),
            (ModerationStatus.FLAGGED, False),
        ],
    )
    def test_visibility_follows_moderation(self, moderation_status, visible):
        comment = make_comment(moderation_status=moderation_status)

        assert comment.is_visible is visible

    def test_deleted_comment_is_not_visible(self):
        comment = make_comment(
            status=CommentStatus.DELETED, moderation_status=ModerationStatus.APPROVED
        )

        assert comment.is_deleted
        assert not comment.is_visible


class TestWithEdit:
    """Tests for Comment.with_edit."""

    def test_edit_appends_history(self):
        """Each edit logs the text it replaced."""
        # Arrange
        editor_id = UserId(uuid4())
        comment = make_comment(author_id=editor_id, text="first")
        edited_at = datetime(2024, 5, 1, 12, 0)

        # Act
        once = comment.with_edit("second", editor_id, reason="typo", edited_at=edited_at)
        twice = once.with_edit("third", editor_id)

        # Assert
        assert twice.text == "third"
        assert twice.edit_count == 2
        assert twice.is_edited
        assert [e.previous_text for e in twice.edit_history] == ["first", "second"]
        assert once.edit_history[0] == EditHistoryEntry(
            previous_text="first",
            editor_id=editor_id,
            edited_at=edited_at,
            reason="typo",
        )
        assert once.updated_at == edited_at
        # The original is untouched
        assert comment.text == "first"
        assert comment.edit_count == 0

    def test_edit_to_empty_text_rejected(self):
        comment = make_comment()

        with pytest.raises(pydantic.ValidationError):
            comment.with_edit("", comment.author_id)
