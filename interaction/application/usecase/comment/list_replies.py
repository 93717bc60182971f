"""Reply listing and family-context comment feeds."""

from pydantic import BaseModel

from interaction.domain.service import CommentService, ProfileService
from interaction.domain.value import CommentId

from .common import CommentItem, describe_authors, parse_user_id


class ListRepliesRequest(BaseModel):
    """List replies request."""

    comment_id: int
    viewer_id: str | None = None  # Anonymous when absent
    limit: int = 50
    offset: int = 0


class ListRepliesResponse(BaseModel):
    """One page of direct replies."""

    comment_id: int
    replies: list[CommentItem]
    limit: int
    offset: int


class BrowseCommentsRequest(BaseModel):
    """Comments across content for one generation level or cultural tag.

    Exactly one of ``generation_level`` and ``cultural_tag`` is set.
    """

    generation_level: int | None = None
    cultural_tag: str | None = None
    viewer_id: str | None = None
    limit: int = 50
    offset: int = 0


class BrowseCommentsResponse(BaseModel):
    """One page of comments, newest first."""

    comments: list[CommentItem]
    limit: int
    offset: int


class ListRepliesUseCase:
    """Use case for paging through the direct replies of a comment."""

    def __init__(
        self,
        comment_service: CommentService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize list replies use case.

        Args:
            comment_service: Comment domain service
            profile_service: Profile decoration service
        """
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        Args:
            request: Parent comment and page bounds

        Returns:
            Replies visible to the viewer, oldest first

        Raises:
            NotFoundError: If the parent is missing or hidden from the viewer
            ValidationError: If the page bounds are invalid
        """
        viewer_id = parse_user_id(request.viewer_id)
        replies = await self.comment_service.list_replies(
            CommentId(request.comment_id),
            viewer_id,
            limit=request.limit,
            offset=request.offset,
        )
        authors = await describe_authors(self.profile_service, replies, viewer_id)
        return ListRepliesResponse(
            comment_id=request.comment_id,
            replies=[
                CommentItem.from_domain(reply, viewer_id, authors.get(reply.author_id))
                for reply in replies
            ],
            limit=request.limit,
            offset=request.offset,
        )


class BrowseCommentsUseCase:
    """Use case for the generation and cultural tag comment feeds."""

    def __init__(
        self,
        comment_service: CommentService,
        profile_service: ProfileService,
    ) -> None:
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: BrowseCommentsRequest) -> BrowseCommentsResponse:
        viewer_id = parse_user_id(request.viewer_id)
        if request.generation_level is not None:
            comments = await self.comment_service.list_by_generation(
                request.generation_level, limit=request.limit, offset=request.offset
            )
        else:
            comments = await self.comment_service.list_by_cultural_tag(
                request.cultural_tag or "", limit=request.limit, offset=request.offset
            )

        authors = await describe_authors(self.profile_service, comments, viewer_id)
        return BrowseCommentsResponse(
            comments=[
                CommentItem.from_domain(c, viewer_id, authors.get(c.author_id))
                for c in comments
            ],
            limit=request.limit,
            offset=request.offset,
        )
