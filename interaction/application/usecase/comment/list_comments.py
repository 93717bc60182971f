"""List comments use cases."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.service import CommentService, ProfileService
from interaction.domain.value import ContentId, UserId

from .common import CommentItem, describe_authors, parse_user_id


class ListCommentsRequest(BaseModel):
    """List comments request."""

    content_id: str  # UUID string
    viewer_id: str | None = None  # Anonymous when absent


class ListCommentsResponse(BaseModel):
    """List comments response."""

    content_id: str
    comments: list[CommentItem]
    total: int


class ListPendingModerationRequest(BaseModel):
    """Moderation queue request."""

    moderator_id: str  # User ID from the actor header
    limit: int = 50


class ListPendingModerationResponse(BaseModel):
    """Moderation queue response."""

    comments: list[CommentItem]
    total: int


class ListCommentsUseCase:
    """Use case for listing the top-level comments of a content item."""

    def __init__(
        self,
        comment_service: CommentService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
            profile_service: Profile decoration service
        """
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Args:
            request: List comments request

        Returns:
            Visible top-level comments, oldest first
        """
        viewer_id = parse_user_id(request.viewer_id)
        comments = await self.comment_service.list_for_content(
            ContentId(UUID(request.content_id)), viewer_id
        )
        authors = await describe_authors(self.profile_service, comments, viewer_id)

        items = [
            CommentItem.from_domain(comment, viewer_id, authors.get(comment.author_id))
            for comment in comments
        ]
        return ListCommentsResponse(
            content_id=request.content_id, comments=items, total=len(items)
        )


class ListPendingModerationUseCase:
    """Use case for reading the moderation queue (PENDING and FLAGGED)."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ListPendingModerationRequest
    ) -> ListPendingModerationResponse:
        moderator_id = UserId(UUID(request.moderator_id))
        comments = await self.comment_service.list_pending_moderation(
            moderator_id, limit=request.limit
        )
        items = [CommentItem.from_domain(c, moderator_id) for c in comments]
        return ListPendingModerationResponse(comments=items, total=len(items))
