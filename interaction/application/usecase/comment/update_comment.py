"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import CommentService
from interaction.domain.value import CommentId, UserId

from .common import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    editor_id: str  # User ID from the actor header
    text: str
    reason: str | None = None


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's text."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Only the author can edit. The previous text is appended to the
        comment's edit history.

        Args:
            request: Update comment request

        Returns:
            Updated comment

        Raises:
            NotFoundError: If the comment does not exist or is deleted
            ForbiddenError: If the editor is not the author
            ValidationError: If the new text is invalid
        """
        editor_id = UserId(UUID(request.editor_id))
        comment = await self.comment_service.edit_comment(
            comment_id=CommentId(request.comment_id),
            editor_id=editor_id,
            new_text=request.text,
            reason=request.reason,
        )
        return UpdateCommentResponse(comment=CommentItem.from_domain(comment, editor_id))
