"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import CommentService
from interaction.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    requester_id: str  # User ID from the actor header


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    status: str


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment (author or moderator)."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        comment = await self.comment_service.delete_comment(
            comment_id=CommentId(request.comment_id),
            requester_id=UserId(UUID(request.requester_id)),
        )
        return DeleteCommentResponse(comment_id=comment.id, status=comment.status.value)
