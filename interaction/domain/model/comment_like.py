"""Comment like entity.

Each user can like a given comment at most once (enforced by a unique
constraint on (comment_id, user_id)).
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from interaction.domain.model.common import DomainModel
from interaction.domain.value import CommentId, CommentLikeId, UserId


class CommentLike(DomainModel):
    """A user's like on a comment."""

    id: Optional[CommentLikeId] = None
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
