"""Domain layer DI providers."""

from dishka import Scope, provide

from interaction.config import (
    CommentSettings,
    EventSettings,
    ModerationSettings,
    ThreadSettings,
)
from interaction.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    ReactionRepository,
)
from interaction.domain.service import (
    CommentService,
    EventChannel,
    EventEmitter,
    ProfileDirectory,
    ProfileService,
    ReactionService,
)
from interaction.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction,
    and its own event emitter so held events never leak between requests.
    """

    scope = Scope.REQUEST

    @provide
    def get_event_emitter(
        self, channel: EventChannel, settings: EventSettings
    ) -> EventEmitter:
        """Provide interaction event emitter."""
        return EventEmitter(channel=channel, settings=settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        event_emitter: EventEmitter,
        comment_settings: CommentSettings,
        thread_settings: ThreadSettings,
        moderation_settings: ModerationSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_like_repository=comment_like_repository,
            event_emitter=event_emitter,
            comment_settings=comment_settings,
            thread_settings=thread_settings,
            moderation_settings=moderation_settings,
        )

    @provide
    def get_reaction_service(
        self, reaction_repository: ReactionRepository, event_emitter: EventEmitter
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository, event_emitter=event_emitter
        )

    @provide
    def get_profile_service(self, directory: ProfileDirectory) -> ProfileService:
        """Provide profile decoration service."""
        return ProfileService(directory=directory)
