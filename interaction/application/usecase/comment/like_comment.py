"""Like and unlike comment use cases."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import CommentService
from interaction.domain.value import CommentId, UserId


class LikeCommentRequest(BaseModel):
    """Like or unlike request."""

    comment_id: int
    user_id: str  # User ID from the actor header


class LikeCommentResponse(BaseModel):
    """Like state after the operation."""

    comment_id: int
    like_count: int
    liked: bool


class LikeCommentUseCase:
    """Use case for liking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize like comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: LikeCommentRequest) -> LikeCommentResponse:
        """Execute like flow.

        Args:
            request: Like request

        Returns:
            Updated like count

        Raises:
            NotFoundError: If the comment does not exist or is deleted
            ConflictError: If the user already liked the comment
        """
        comment = await self.comment_service.like_comment(
            CommentId(request.comment_id), UserId(UUID(request.user_id))
        )
        return LikeCommentResponse(
            comment_id=comment.id, like_count=comment.like_count, liked=True
        )


class UnlikeCommentUseCase:
    """Use case for removing a like from a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: LikeCommentRequest) -> LikeCommentResponse:
        comment = await self.comment_service.unlike_comment(
            CommentId(request.comment_id), UserId(UUID(request.user_id))
        )
        return LikeCommentResponse(
            comment_id=comment.id, like_count=comment.like_count, liked=False
        )


class CommentLikedRequest(BaseModel):
    """Has-liked request."""

    comment_id: int
    user_id: str | None = None  # Anonymous when absent


class CommentLikedResponse(BaseModel):
    """Whether the viewer currently likes the comment."""

    comment_id: int
    liked: bool


class GetCommentLikedUseCase:
    """Use case for checking the viewer's like on a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: CommentLikedRequest) -> CommentLikedResponse:
        liked = await self.comment_service.has_user_liked(
            CommentId(request.comment_id),
            UserId(UUID(request.user_id)) if request.user_id else None,
        )
        return CommentLikedResponse(comment_id=request.comment_id, liked=liked)
