"""Unit tests for moderation use cases."""

from uuid import uuid4

import pytest

from interaction.application.usecase.comment import (
    ChangeVisibilityRequest,
    ChangeVisibilityUseCase,
    FlagCommentRequest,
    FlagCommentUseCase,
    ListPendingModerationRequest,
    ListPendingModerationUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
)
from interaction.domain.error import ForbiddenError, ValidationError
from interaction.domain.service import CommentService
from interaction.domain.value import (
    CommentStatus,
    ContentId,
    ModerationDecision,
    UserId,
)
from tests.conftest import MODERATOR_ID
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def pending_comment(service: CommentService, text: str = "Needs review"):
    return await service.create_comment(
        content_id=ContentId(uuid4()), author_id=UserId(uuid4()), text=text
    )


class TestModerateCommentUseCase:
    """Tests for ModerateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_approves(self, unit_env):
        """Approving a pending comment makes it visible."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service)
        use_case = ModerateCommentUseCase(comment_service=comment_service)

        # Act
        response = await use_case.execute(
            ModerateCommentRequest(
                comment_id=comment.id,
                moderator_id=str(MODERATOR_ID),
                decision=ModerationDecision.APPROVED,
            )
        )

        # Assert
        assert response.comment.moderation_status == "APPROVED"

    @pytest.mark.asyncio
    async def test_non_moderator_forbidden(self, unit_env):
        """Regular users cannot record moderation decisions."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service)
        use_case = ModerateCommentUseCase(comment_service=comment_service)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ModerateCommentRequest(
                    comment_id=comment.id,
                    moderator_id=str(uuid4()),
                    decision=ModerationDecision.REJECTED,
                )
            )


class TestFlagCommentUseCase:
    """Tests for FlagCommentUseCase."""

    @pytest.mark.asyncio
    async def test_any_user_can_flag(self, unit_env):
        """Flagging puts an approved comment back in the queue."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service)
        await comment_service.moderate_comment(
            comment.id, MODERATOR_ID, ModerationDecision.APPROVED
        )
        use_case = FlagCommentUseCase(comment_service=comment_service)

        # Act
        response = await use_case.execute(
            FlagCommentRequest(
                comment_id=comment.id, flagger_id=str(uuid4()), reason="rude"
            )
        )

        # Assert
        assert response.moderation_status == "FLAGGED"
        assert response.comment is None

    @pytest.mark.asyncio
    async def test_moderator_flag_returns_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service, text="Borderline")
        use_case = FlagCommentUseCase(comment_service=comment_service)

        # Act
        response = await use_case.execute(
            FlagCommentRequest(comment_id=comment.id, flagger_id=str(MODERATOR_ID))
        )

        # Assert
        assert response.comment.text == "Borderline"
        assert response.comment.moderation_status == "FLAGGED"


class TestChangeVisibilityUseCase:
    """Tests for ChangeVisibilityUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_hides_comment(self, unit_env):
        """Moderators can hide an active comment."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service)
        use_case = ChangeVisibilityUseCase(comment_service=comment_service)

        # Act
        response = await use_case.execute(
            ChangeVisibilityRequest(
                comment_id=comment.id,
                moderator_id=str(MODERATOR_ID),
                status=CommentStatus.HIDDEN,
            )
        )

        # Assert
        assert response.comment.status == "HIDDEN"

    @pytest.mark.asyncio
    async def test_cannot_set_deleted_through_visibility(self, unit_env):
        """Deletion goes through the delete flow, not visibility changes."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment = await pending_comment(comment_service)
        use_case = ChangeVisibilityUseCase(comment_service=comment_service)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                ChangeVisibilityRequest(
                    comment_id=comment.id,
                    moderator_id=str(MODERATOR_ID),
                    status=CommentStatus.DELETED,
                )
            )


class TestListPendingModerationUseCase:
    """Tests for ListPendingModerationUseCase."""

    @pytest.mark.asyncio
    async def test_queue_oldest_first(self, unit_env):
        """Queue holds pending and flagged comments, oldest first."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        first = await pending_comment(comment_service, "First")
        second = await pending_comment(comment_service, "Second")
        approved = await pending_comment(comment_service, "Approved")
        await comment_service.moderate_comment(
            approved.id, MODERATOR_ID, ModerationDecision.APPROVED
        )
        use_case = ListPendingModerationUseCase(comment_service=comment_service)

        # Act
        response = await use_case.execute(
            ListPendingModerationRequest(moderator_id=str(MODERATOR_ID))
        )

        # Assert
        assert [c.comment_id for c in response.comments] == [first.id, second.id]
        assert response.total == 2

    @pytest.mark.asyncio
    async def test_queue_requires_moderator(self, unit_env):
        """Regular users cannot read the queue."""
        # Arrange
        use_case = ListPendingModerationUseCase(
            comment_service=await unit_env.get(CommentService)
        )

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(ListPendingModerationRequest(moderator_id=str(uuid4())))
