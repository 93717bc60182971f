"""Create comment use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from interaction.domain.service import CommentService, ProfileService
from interaction.domain.value import CommentId, ContentId, FamilyId, UserId

from .common import CommentItem, describe_authors


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content_id: str  # UUID string
    author_id: str  # User ID from the actor header
    text: str
    parent_id: int | None = None  # Parent comment ID for replies
    mentions: list[str] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    media_urls: list[str] = Field(default_factory=list)
    family_id: str | None = None
    generation_level: int | None = None
    family_context: dict[str, Any] | None = None
    relationship_context: dict[str, Any] | None = None
    cultural_tags: list[str] = Field(default_factory=list)
    language_code: str | None = None
    is_anonymous: bool = False
    is_private: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for commenting on content or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            profile_service: Profile decoration service
        """
        self.comment_service = comment_service
        self.profile_service = profile_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment, decorated with the author's profile

        Raises:
            NotFoundError: If the parent comment does not exist
            ValidationError: If text or threading is invalid
        """
        author_id = UserId(UUID(request.author_id))

        comment = await self.comment_service.create_comment(
            content_id=ContentId(UUID(request.content_id)),
            author_id=author_id,
            text=request.text,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
            mentions=[UserId(UUID(m)) for m in request.mentions],
            hashtags=request.hashtags,
            media_urls=request.media_urls,
            family_id=FamilyId(UUID(request.family_id)) if request.family_id else None,
            generation_level=request.generation_level,
            family_context=request.family_context,
            relationship_context=request.relationship_context,
            cultural_tags=request.cultural_tags,
            language_code=request.language_code,
            is_anonymous=request.is_anonymous,
            is_private=request.is_private,
            metadata=request.metadata,
        )

        authors = await describe_authors(self.profile_service, [comment], author_id)
        return CreateCommentResponse(
            comment=CommentItem.from_domain(
                comment, author_id, authors.get(comment.author_id)
            )
        )
