"""Moderation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel, Field

from interaction.application.usecase.comment import (
    ChangeVisibilityRequest,
    ChangeVisibilityUseCase,
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    ListPendingModerationRequest,
    ListPendingModerationResponse,
    ListPendingModerationUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
    ModerationResponse,
)
from interaction.domain.value import CommentStatus, ModerationDecision
from interaction.interface.api.identity import require_actor

router = APIRouter(tags=["moderation"], route_class=DishkaRoute)


class ModerateCommentAPIRequest(BaseModel):
    """API request for a moderation decision."""

    decision: ModerationDecision
    reason: str | None = Field(default=None, max_length=500)


class FlagCommentAPIRequest(BaseModel):
    """API request for flagging a comment."""

    reason: str | None = Field(default=None, max_length=500)


class ChangeVisibilityAPIRequest(BaseModel):
    """API request for hiding or archiving a comment."""

    status: CommentStatus


@router.post("/comments/{comment_id}/moderation", response_model=ModerationResponse)
async def moderate_comment(
    comment_id: int,
    request: ModerateCommentAPIRequest,
    moderate_comment_use_case: FromDishka[ModerateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> ModerationResponse:
    """Approve or reject a comment.

    Requires a configured moderator.

    Args:
        comment_id: Comment ID
        request: Decision and optional reason
        moderate_comment_use_case: Moderate comment use case from DI
        x_user_id: Actor ID header

    Returns:
        Moderated comment
    """
    moderator_id = require_actor(x_user_id, "moderate comments")
    use_case_request = ModerateCommentRequest(
        comment_id=comment_id,
        moderator_id=moderator_id,
        decision=request.decision,
        reason=request.reason,
    )
    return await moderate_comment_use_case.execute(use_case_request)


@router.post("/comments/{comment_id}/flag", response_model=FlagCommentResponse)
async def flag_comment(
    comment_id: int,
    request: FlagCommentAPIRequest,
    flag_comment_use_case: FromDishka[FlagCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> FlagCommentResponse:
    """Flag a comment for moderator review."""
    flagger_id = require_actor(x_user_id, "flag comments")
    use_case_request = FlagCommentRequest(
        comment_id=comment_id, flagger_id=flagger_id, reason=request.reason
    )
    return await flag_comment_use_case.execute(use_case_request)


@router.post("/comments/{comment_id}/visibility", response_model=ModerationResponse)
async def change_visibility(
    comment_id: int,
    request: ChangeVisibilityAPIRequest,
    change_visibility_use_case: FromDishka[ChangeVisibilityUseCase],
    x_user_id: str | None = Header(default=None),
) -> ModerationResponse:
    """Hide or archive an active comment (moderators only)."""
    moderator_id = require_actor(x_user_id, "change comment visibility")
    use_case_request = ChangeVisibilityRequest(
        comment_id=comment_id, moderator_id=moderator_id, status=request.status
    )
    return await change_visibility_use_case.execute(use_case_request)


@router.get("/moderation/comments", response_model=ListPendingModerationResponse)
async def list_pending_moderation(
    list_pending_use_case: FromDishka[ListPendingModerationUseCase],
    limit: int = Query(default=50, ge=1, le=200),
    x_user_id: str | None = Header(default=None),
) -> ListPendingModerationResponse:
    """List comments awaiting a moderation decision, oldest first."""
    moderator_id = require_actor(x_user_id, "view the moderation queue")
    request = ListPendingModerationRequest(moderator_id=moderator_id, limit=limit)
    return await list_pending_use_case.execute(request)
