"""Moderation use cases: decisions, flags and visibility changes."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import CommentService
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ModerationDecision,
    UserId,
)

from .common import CommentItem


class ModerateCommentRequest(BaseModel):
    """Moderate comment request."""

    comment_id: int
    moderator_id: str  # User ID from the actor header
    decision: ModerationDecision
    reason: str | None = None


class FlagCommentRequest(BaseModel):
    """Flag comment request."""

    comment_id: int
    flagger_id: str  # User ID from the actor header
    reason: str | None = None


class ChangeVisibilityRequest(BaseModel):
    """Change visibility request."""

    comment_id: int
    moderator_id: str  # User ID from the actor header
    status: CommentStatus


class ModerationResponse(BaseModel):
    """Comment state after a moderation action."""

    comment: CommentItem


class FlagCommentResponse(BaseModel):
    """Outcome of flagging a comment.

    ``comment`` is only filled in for moderators and the comment's author.
    Other flaggers learn the new moderation status and nothing else, since
    a flagged comment is no longer visible to them.
    """

    comment_id: int
    moderation_status: str
    comment: CommentItem | None = None


class ModerateCommentUseCase:
    """Use case for applying a moderator's decision to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize moderate comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> ModerationResponse:
        """Execute moderation flow.

        Args:
            request: Moderation decision

        Returns:
            Moderated comment

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the actor is not a moderator
            InvalidTransitionError: If the decision is not allowed
        """
        moderator_id = UserId(UUID(request.moderator_id))
        comment = await self.comment_service.moderate_comment(
            comment_id=CommentId(request.comment_id),
            moderator_id=moderator_id,
            decision=request.decision,
            reason=request.reason,
        )
        return ModerationResponse(comment=CommentItem.from_domain(comment, moderator_id))


class FlagCommentUseCase:
    """Use case for flagging a comment for moderator review.

    Any identified user can flag. The comment leaves public view until a
    moderator decides on it.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        flagger_id = UserId(UUID(request.flagger_id))
        comment = await self.comment_service.flag_comment(
            comment_id=CommentId(request.comment_id),
            flagger_id=flagger_id,
            reason=request.reason,
        )

        can_read = comment.author_id == flagger_id or self.comment_service.is_moderator(
            flagger_id
        )
        return FlagCommentResponse(
            comment_id=comment.id,
            moderation_status=comment.moderation_status.value,
            comment=CommentItem.from_domain(comment, flagger_id) if can_read else None,
        )


class ChangeVisibilityUseCase:
    """Use case for hiding or archiving a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ChangeVisibilityRequest) -> ModerationResponse:
        moderator_id = UserId(UUID(request.moderator_id))
        comment = await self.comment_service.change_visibility(
            comment_id=CommentId(request.comment_id),
            moderator_id=moderator_id,
            status=request.status,
        )
        return ModerationResponse(comment=CommentItem.from_domain(comment, moderator_id))
