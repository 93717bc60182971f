"""Comment statistics read models."""

from typing import Optional

from interaction.domain.value import ContentId, UserId
from interaction.domain.value.common import ValueObject


class HashtagCount(ValueObject):
    """How many visible comments used a hashtag."""

    hashtag: str
    count: int


class MentionCount(ValueObject):
    """How many visible comments mentioned a user."""

    user_id: UserId
    count: int


class CommentStatistics(ValueObject):
    """Aggregate figures over the visible comments of a content item.

    ``average_sentiment`` is None when no visible comment carries a
    sentiment score.
    """

    content_id: ContentId
    total_comments: int
    total_replies: int
    total_likes: int
    average_sentiment: Optional[float] = None
    top_hashtags: list[HashtagCount] = []
    top_mentions: list[MentionCount] = []
