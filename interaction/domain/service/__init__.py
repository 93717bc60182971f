"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentThreadNode
from .event_emitter import EventChannel, EventEmitter
from .profile_service import (
    AuthorContext,
    ProfileDirectory,
    ProfileLookupError,
    ProfileService,
    UserProfile,
)
from .reaction_service import ReactionService

__all__ = [
    "AuthorContext",
    "CommentService",
    "CommentThreadNode",
    "EventChannel",
    "EventEmitter",
    "ProfileDirectory",
    "ProfileLookupError",
    "ProfileService",
    "ReactionService",
    "Service",
    "UserProfile",
]
