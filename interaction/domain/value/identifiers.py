"""Strongly typed identifiers for interaction domain entities.

Records owned by this service (comments, reactions, likes) use integer
surrogate keys assigned by the store. References to entities owned by
other services (users, content, families) are opaque UUIDs.
"""

from typing import NewType
from uuid import UUID

# Store-assigned surrogate keys
CommentId = NewType("CommentId", int)
ReactionId = NewType("ReactionId", int)
CommentLikeId = NewType("CommentLikeId", int)

# External references
UserId = NewType("UserId", UUID)
ContentId = NewType("ContentId", UUID)
FamilyId = NewType("FamilyId", UUID)
EventId = NewType("EventId", UUID)
