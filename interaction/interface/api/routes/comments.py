"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, Field

from interaction.application.usecase.comment import (
    BrowseCommentsRequest,
    BrowseCommentsResponse,
    BrowseCommentsUseCase,
    CommentLikedRequest,
    CommentLikedResponse,
    CommentStatisticsResponse,
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentLikedUseCase,
    GetCommentStatisticsUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    LikeCommentRequest,
    LikeCommentResponse,
    LikeCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
    TrendingHashtagsResponse,
    TrendingHashtagsUseCase,
    UnlikeCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from interaction.interface.api.identity import optional_actor, require_actor

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Text length is enforced by the comment service (configurable limit).
    """

    text: str
    parent_id: int | None = None  # Parent comment ID for replies
    mentions: list[UUID] = Field(default_factory=list)
    hashtags: list[str] = Field(default_factory=list)
    media_urls: list[str] = Field(default_factory=list)
    family_id: UUID | None = None
    generation_level: int | None = None
    family_context: dict | None = None
    relationship_context: dict | None = None
    cultural_tags: list[str] = Field(default_factory=list)
    language_code: str | None = None
    is_anonymous: bool = False
    is_private: bool = False
    metadata: dict = Field(default_factory=dict)


@router.post(
    "/contents/{content_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    content_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Comment on a content item or reply to another comment.

    Args:
        content_id: Content UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        x_user_id: Actor ID header

    Returns:
        Created comment
    """
    author_id = require_actor(x_user_id, "comment")

    use_case_request = CreateCommentRequest(
        content_id=str(content_id),
        author_id=author_id,
        text=request.text,
        parent_id=request.parent_id,
        mentions=[str(m) for m in request.mentions],
        hashtags=request.hashtags,
        media_urls=request.media_urls,
        family_id=str(request.family_id) if request.family_id else None,
        generation_level=request.generation_level,
        family_context=request.family_context,
        relationship_context=request.relationship_context,
        cultural_tags=request.cultural_tags,
        language_code=request.language_code,
        is_anonymous=request.is_anonymous,
        is_private=request.is_private,
        metadata=request.metadata,
    )
    return await create_comment_use_case.execute(use_case_request)


@router.get("/contents/{content_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    content_id: UUID,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    x_user_id: str | None = Header(default=None),
) -> ListCommentsResponse:
    """List visible top-level comments of a content item, oldest first."""
    request = ListCommentsRequest(
        content_id=str(content_id), viewer_id=optional_actor(x_user_id)
    )
    return await list_comments_use_case.execute(request)


@router.get("/comments/{comment_id}/thread", response_model=GetThreadResponse)
async def get_thread(
    comment_id: int,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    x_user_id: str | None = Header(default=None),
) -> GetThreadResponse:
    """Get a comment and its visible replies as a tree.

    Moderators (by actor header) also see comments awaiting moderation.

    Args:
        comment_id: Root comment ID
        get_thread_use_case: Get thread use case from DI
        x_user_id: Actor ID header (optional)

    Returns:
        Thread rooted at the comment
    """
    request = GetThreadRequest(comment_id=comment_id, viewer_id=optional_actor(x_user_id))
    return await get_thread_use_case.execute(request)


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str
    reason: str | None = Field(default=None, max_length=500)


@router.patch("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: int,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's text. Only the author can edit."""
    editor_id = require_actor(x_user_id, "edit comments")
    use_case_request = UpdateCommentRequest(
        comment_id=comment_id,
        editor_id=editor_id,
        text=request.text,
        reason=request.reason,
    )
    return await update_comment_use_case.execute(use_case_request)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment (author or moderator)."""
    requester_id = require_actor(x_user_id, "delete comments")
    request = DeleteCommentRequest(comment_id=comment_id, requester_id=requester_id)
    return await delete_comment_use_case.execute(request)


@router.post("/comments/{comment_id}/like", response_model=LikeCommentResponse)
async def like_comment(
    comment_id: int,
    like_comment_use_case: FromDishka[LikeCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> LikeCommentResponse:
    """Like a comment (once per user)."""
    user_id = require_actor(x_user_id, "like comments")
    request = LikeCommentRequest(comment_id=comment_id, user_id=user_id)
    return await like_comment_use_case.execute(request)


@router.delete("/comments/{comment_id}/like", response_model=LikeCommentResponse)
async def unlike_comment(
    comment_id: int,
    unlike_comment_use_case: FromDishka[UnlikeCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> LikeCommentResponse:
    """Remove the actor's like from a comment."""
    user_id = require_actor(x_user_id, "unlike comments")
    request = LikeCommentRequest(comment_id=comment_id, user_id=user_id)
    return await unlike_comment_use_case.execute(request)


@router.get("/comments/{comment_id}/liked", response_model=CommentLikedResponse)
async def get_comment_liked(
    comment_id: int,
    get_comment_liked_use_case: FromDishka[GetCommentLikedUseCase],
    x_user_id: str | None = Header(default=None),
) -> CommentLikedResponse:
    """Whether the actor currently likes a comment (false for anonymous viewers)."""
    request = CommentLikedRequest(comment_id=comment_id, user_id=optional_actor(x_user_id))
    return await get_comment_liked_use_case.execute(request)


@router.get("/comments/{comment_id}/replies", response_model=ListRepliesResponse)
async def list_replies(
    comment_id: int,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    x_user_id: str | None = Header(default=None),
) -> ListRepliesResponse:
    """List one page of direct replies to a comment, oldest first.

    Args:
        comment_id: Parent comment ID
        list_replies_use_case: List replies use case from DI
        limit: Page size
        offset: Number of replies to skip
        x_user_id: Actor ID header (optional)

    Returns:
        Replies visible to the actor
    """
    request = ListRepliesRequest(
        comment_id=comment_id,
        viewer_id=optional_actor(x_user_id),
        limit=limit,
        offset=offset,
    )
    return await list_replies_use_case.execute(request)


@router.get(
    "/contents/{content_id}/comments/statistics",
    response_model=CommentStatisticsResponse,
)
async def get_comment_statistics(
    content_id: UUID,
    get_comment_statistics_use_case: FromDishka[GetCommentStatisticsUseCase],
) -> CommentStatisticsResponse:
    """Totals, likes, sentiment and top hashtags and mentions for a content item."""
    return await get_comment_statistics_use_case.execute(str(content_id))


@router.get("/hashtags/trending", response_model=TrendingHashtagsResponse)
async def get_trending_hashtags(
    trending_hashtags_use_case: FromDishka[TrendingHashtagsUseCase],
    limit: int = Query(default=10, ge=1, le=100),
) -> TrendingHashtagsResponse:
    """Most used hashtags on visible comments in the trending window."""
    return await trending_hashtags_use_case.execute(limit)


@router.get(
    "/generations/{generation_level}/comments", response_model=BrowseCommentsResponse
)
async def list_comments_by_generation(
    generation_level: int,
    browse_comments_use_case: FromDishka[BrowseCommentsUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    x_user_id: str | None = Header(default=None),
) -> BrowseCommentsResponse:
    """List visible public comments written at a generation level, newest first."""
    request = BrowseCommentsRequest(
        generation_level=generation_level,
        viewer_id=optional_actor(x_user_id),
        limit=limit,
        offset=offset,
    )
    return await browse_comments_use_case.execute(request)


@router.get(
    "/cultural-tags/{cultural_tag}/comments", response_model=BrowseCommentsResponse
)
async def list_comments_by_cultural_tag(
    cultural_tag: str,
    browse_comments_use_case: FromDishka[BrowseCommentsUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    x_user_id: str | None = Header(default=None),
) -> BrowseCommentsResponse:
    """List visible public comments carrying a cultural tag, newest first."""
    request = BrowseCommentsRequest(
        cultural_tag=cultural_tag,
        viewer_id=optional_actor(x_user_id),
        limit=limit,
        offset=offset,
    )
    return await browse_comments_use_case.execute(request)
