"""Comment use cases."""

from .comment_statistics import (
    CommentStatisticsResponse,
    GetCommentStatisticsUseCase,
    HashtagCountItem,
    MentionCountItem,
    TrendingHashtagsResponse,
    TrendingHashtagsUseCase,
)
from .common import CommentItem, EditHistoryItem
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ThreadNodeResponse,
)
from .like_comment import (
    CommentLikedRequest,
    CommentLikedResponse,
    GetCommentLikedUseCase,
    LikeCommentRequest,
    LikeCommentResponse,
    LikeCommentUseCase,
    UnlikeCommentUseCase,
)
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
    ListPendingModerationRequest,
    ListPendingModerationResponse,
    ListPendingModerationUseCase,
)
from .list_replies import (
    BrowseCommentsRequest,
    BrowseCommentsResponse,
    BrowseCommentsUseCase,
    ListRepliesRequest,
    ListRepliesResponse,
    ListRepliesUseCase,
)
from .moderate_comment import (
    ChangeVisibilityRequest,
    ChangeVisibilityUseCase,
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    ModerateCommentRequest,
    ModerateCommentUseCase,
    ModerationResponse,
)
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentItem",
    "EditHistoryItem",
    "CommentStatisticsResponse",
    "GetCommentStatisticsUseCase",
    "HashtagCountItem",
    "MentionCountItem",
    "TrendingHashtagsResponse",
    "TrendingHashtagsUseCase",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ThreadNodeResponse",
    "CommentLikedRequest",
    "CommentLikedResponse",
    "GetCommentLikedUseCase",
    "LikeCommentRequest",
    "LikeCommentResponse",
    "LikeCommentUseCase",
    "UnlikeCommentUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ListPendingModerationRequest",
    "ListPendingModerationResponse",
    "ListPendingModerationUseCase",
    "BrowseCommentsRequest",
    "BrowseCommentsResponse",
    "BrowseCommentsUseCase",
    "ListRepliesRequest",
    "ListRepliesResponse",
    "ListRepliesUseCase",
    "ChangeVisibilityRequest",
    "ChangeVisibilityUseCase",
    "FlagCommentRequest",
    "FlagCommentResponse",
    "FlagCommentUseCase",
    "ModerateCommentRequest",
    "ModerateCommentUseCase",
    "ModerationResponse",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
