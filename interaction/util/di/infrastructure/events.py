"""Event channel infrastructure providers."""

from dishka import Scope, provide
import logfire

from interaction.adapter.events import HttpEventChannel, LogfireEventChannel
from interaction.config import EventSettings
from interaction.domain.service import EventChannel
from interaction.util.di.base import ProviderBase


class EventsProvider(ProviderBase):
    """Event channel component base."""

    __mock_component__ = "events"


class ProdEventsProvider(EventsProvider):
    """Production event channel provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_event_channel(self, settings: EventSettings) -> EventChannel:
        """Provide event channel.

        Returns:
            Broker channel when a broker URL is configured, otherwise a
            channel that only logs events
        """
        if not settings.broker_url:
            logfire.info("No event broker configured, events will only be logged")
            return LogfireEventChannel()

        return HttpEventChannel(broker_url=settings.broker_url, timeout=settings.timeout)
