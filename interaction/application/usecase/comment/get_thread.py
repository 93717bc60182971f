"""Get comment thread use case."""

from pydantic import BaseModel

from interaction.domain.model import Comment
from interaction.domain.service import (
    AuthorContext,
    CommentService,
    CommentThreadNode,
    ProfileService,
)
from interaction.domain.value import CommentId, UserId

from .common import CommentItem, describe_authors, parse_user_id


class ThreadNodeResponse(BaseModel):
    """Comment thread node for API response.

    Recursive structure mirroring the domain thread. Placeholder nodes
    stand in for deleted comments that still have visible replies.
    """

    comment: CommentItem
    placeholder: bool
    replies: list["ThreadNodeResponse"]

    @classmethod
    def from_domain(
        cls,
        node: CommentThreadNode,
        viewer_id: UserId | None,
        authors: dict[UserId, AuthorContext],
    ) -> "ThreadNodeResponse":
        """Convert a domain thread node to a response model.

        Args:
            node: Domain thread node
            viewer_id: Viewing user
            authors: Author context by author ID

        Returns:
            API response model with replies recursively converted
        """
        return cls(
            comment=CommentItem.from_domain(
                node.comment,
                viewer_id,
                None if node.placeholder else authors.get(node.comment.author_id),
            ),
            placeholder=node.placeholder,
            replies=[cls.from_domain(reply, viewer_id, authors) for reply in node.replies],
        )


class GetThreadRequest(BaseModel):
    """Get thread request."""

    comment_id: int
    viewer_id: str | None = None  # Anonymous when absent


class GetThreadResponse(BaseModel):
    """Get thread response."""

    thread: ThreadNodeResponse
    total_comments: int


class GetThreadUseCase:
    """Use case for reading a comment together with its reply tree."""

    def __init__(
        self,
        comment_service: CommentService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            profile_service: Profile decoration service
        """
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Materialize the visible thread via the comment service
        2. Look up author context for every rendered, non-placeholder comment
        3. Convert domain nodes to response models

        Args:
            request: Get thread request

        Returns:
            Thread rooted at the requested comment

        Raises:
            NotFoundError: If the comment does not exist or is not visible
        """
        viewer_id = parse_user_id(request.viewer_id)
        root = await self.comment_service.fetch_thread(
            CommentId(request.comment_id), viewer_id
        )

        comments: list[Comment] = []

        def collect(node: CommentThreadNode) -> None:
            if not node.placeholder:
                comments.append(node.comment)
            for reply in node.replies:
                collect(reply)

        collect(root)

        def count_nodes(node: CommentThreadNode) -> int:
            return 1 + sum(count_nodes(reply) for reply in node.replies)

        authors = await describe_authors(self.profile_service, comments, viewer_id)
        return GetThreadResponse(
            thread=ThreadNodeResponse.from_domain(root, viewer_id, authors),
            total_comments=count_nodes(root),
        )
