"""Profile directory infrastructure providers."""

from dishka import Scope, provide
import logfire

from interaction.adapter.directory import HttpProfileDirectory, InMemoryProfileDirectory
from interaction.config import DirectorySettings
from interaction.domain.service import ProfileDirectory
from interaction.util.di.base import ProviderBase


class DirectoryProvider(ProviderBase):
    """Profile directory component base."""

    __mock_component__ = "directory"


class ProdDirectoryProvider(DirectoryProvider):
    """Production profile directory provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_profile_directory(self, settings: DirectorySettings) -> ProfileDirectory:
        """Provide profile directory.

        Returns:
            HTTP directory client when a base URL is configured, otherwise an
            empty in-process directory (responses stay undecorated)
        """
        if not settings.base_url:
            logfire.info("No profile directory configured, responses undecorated")
            return InMemoryProfileDirectory()

        return HttpProfileDirectory(base_url=settings.base_url, timeout=settings.timeout)
