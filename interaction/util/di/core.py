"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from interaction.config import (
    CommentSettings,
    DirectorySettings,
    EventSettings,
    ModerationSettings,
    Settings,
    ThreadSettings,
)
from interaction.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each nested section is also provided on its own so services only see
    the configuration they use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments

    @provide
    def provide_thread_settings(self, settings: Settings) -> ThreadSettings:
        return settings.thread

    @provide
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        return settings.moderation

    @provide
    def provide_event_settings(self, settings: Settings) -> EventSettings:
        return settings.events

    @provide
    def provide_directory_settings(self, settings: Settings) -> DirectorySettings:
        return settings.directory
