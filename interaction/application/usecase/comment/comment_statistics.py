"""Comment statistics and trending hashtag use cases."""

from uuid import UUID

from pydantic import BaseModel

from interaction.domain.model import CommentStatistics
from interaction.domain.service import CommentService
from interaction.domain.value import ContentId


class HashtagCountItem(BaseModel):
    """Hashtag with its number of uses."""

    hashtag: str
    count: int


class MentionCountItem(BaseModel):
    """Mentioned user with the number of comments mentioning them."""

    user_id: str
    count: int


class CommentStatisticsResponse(BaseModel):
    """Statistics over the visible comments of a content item."""

    content_id: str
    total_comments: int
    total_replies: int
    total_likes: int
    average_sentiment: float | None
    top_hashtags: list[HashtagCountItem]
    top_mentions: list[MentionCountItem]

    @classmethod
    def from_domain(cls, statistics: CommentStatistics) -> "CommentStatisticsResponse":
        return cls(
            content_id=str(statistics.content_id),
            total_comments=statistics.total_comments,
            total_replies=statistics.total_replies,
            total_likes=statistics.total_likes,
            average_sentiment=statistics.average_sentiment,
            top_hashtags=[
                HashtagCountItem(hashtag=h.hashtag, count=h.count)
                for h in statistics.top_hashtags
            ],
            top_mentions=[
                MentionCountItem(user_id=str(m.user_id), count=m.count)
                for m in statistics.top_mentions
            ],
        )


class TrendingHashtagsResponse(BaseModel):
    """Most used hashtags in the trending window."""

    hashtags: list[HashtagCountItem]


class GetCommentStatisticsUseCase:
    """Use case for the comment statistics of a content item."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, content_id: str) -> CommentStatisticsResponse:
        statistics = await self.comment_service.get_comment_statistics(
            ContentId(UUID(content_id))
        )
        return CommentStatisticsResponse.from_domain(statistics)


class TrendingHashtagsUseCase:
    """Use case for the trending hashtags across all content."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, limit: int | None = None) -> TrendingHashtagsResponse:
        hashtags = await self.comment_service.trending_hashtags(limit)
        return TrendingHashtagsResponse(
            hashtags=[
                HashtagCountItem(hashtag=h.hashtag, count=h.count) for h in hashtags
            ]
        )
