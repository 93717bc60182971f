"""Interaction event channels.

The broker channel posts each event as JSON to ``{broker_url}/topics/{topic}``
with the content ID as partition key, so events for one content item stay
ordered when the broker honours keys.
"""

from typing import Optional

import httpx
import logfire

from interaction.adapter.error import EventDeliveryError
from interaction.domain.model import InteractionEvent
from interaction.domain.service.event_emitter import EventChannel


class HttpEventChannel(EventChannel):
    """Event channel backed by an HTTP event broker."""

    def __init__(self, broker_url: str, timeout: float = 5.0) -> None:
        """Initialize HTTP event channel.

        Args:
            broker_url: Base URL of the event broker
            timeout: Request timeout in seconds
        """
        self.broker_url = broker_url.rstrip("/")
        self.timeout = timeout

    async def send(self, topic: str, event: InteractionEvent) -> None:
        """Publish an event on a broker topic.

        Args:
            topic: Topic name
            event: Event to publish

        Raises:
            EventDeliveryError: If the broker cannot be reached or rejects the event
        """
        payload = {
            "key": str(event.content_id),
            "value": event.model_dump(mode="json"),
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.broker_url}/topics/{topic}",
                    json=payload,
                    timeout=self.timeout,
                )

                if response.status_code >= 300:
                    logfire.error(
                        "Event broker rejected event",
                        topic=topic,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise EventDeliveryError(
                        f"Broker rejected event: {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Event broker HTTP error", topic=topic, error=str(e))
            raise EventDeliveryError(f"HTTP error publishing event: {e}")


class LogfireEventChannel(EventChannel):
    """Event channel that only records events in the log.

    Used when no broker is configured (local development).
    """

    async def send(self, topic: str, event: InteractionEvent) -> None:
        logfire.info(
            "Interaction event",
            topic=topic,
            event_id=str(event.event_id),
            event_type=event.event_type.value,
            content_id=str(event.content_id),
            user_id=str(event.user_id),
            priority=event.metadata.get("priority"),
        )


class InMemoryEventChannel(EventChannel):
    """Event channel for testing.

    Records every (topic, event) pair it receives. Topics listed in
    ``failing_topics`` raise instead, to exercise delivery failures.
    """

    def __init__(self, failing_topics: Optional[set[str]] = None) -> None:
        self.sent: list[tuple[str, InteractionEvent]] = []
        self.failing_topics: set[str] = set(failing_topics or ())

    async def send(self, topic: str, event: InteractionEvent) -> None:
        if topic in self.failing_topics:
            raise EventDeliveryError(f"Topic unavailable: {topic}")
        self.sent.append((topic, event))

    def events(self, topic: Optional[str] = None) -> list[InteractionEvent]:
        """Events received, optionally only those sent on one topic."""
        return [event for t, event in self.sent if topic is None or t == topic]

    def clear(self) -> None:
        self.sent.clear()
