"""Interaction event emitter.

Turns committed comment and reaction mutations into InteractionEvents and
delivers each one to up to three topics: the general interaction topic,
a kind-specific topic (comments or reactions) and, for notify-worthy
events, the notification topic.

Delivery is best-effort. A failure on one topic is logged and never
prevents delivery to the other topics or reaches the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import logfire

from interaction.config import EventSettings
from interaction.domain.model import Comment, InteractionEvent, Reaction
from interaction.domain.value import (
    ContentId,
    EventPriority,
    EventType,
    InteractionType,
    UserId,
)

from .base import Service

NOTIFY_EVENT_TYPES = frozenset(
    {
        EventType.COMMENT_CREATED,
        EventType.REACTION_ADDED,
        EventType.COMMENT_LIKED,
        EventType.COMMENT_FLAGGED,
        EventType.COMMENT_MODERATED,
    }
)

HIGH_PRIORITY_EVENT_TYPES = frozenset(
    {EventType.COMMENT_FLAGGED, EventType.COMMENT_MODERATED}
)

_INTERACTION_TYPES = {
    EventType.COMMENT_CREATED: InteractionType.COMMENT,
    EventType.COMMENT_UPDATED: InteractionType.COMMENT,
    EventType.COMMENT_DELETED: InteractionType.COMMENT,
    EventType.COMMENT_LIKED: InteractionType.LIKE,
    EventType.COMMENT_UNLIKED: InteractionType.LIKE,
    EventType.COMMENT_FLAGGED: InteractionType.FLAG,
    EventType.COMMENT_MODERATED: InteractionType.MODERATION,
    EventType.REACTION_ADDED: InteractionType.REACTION,
    EventType.REACTION_UPDATED: InteractionType.REACTION,
    EventType.REACTION_REMOVED: InteractionType.REACTION,
}

_ACTIONS = {
    EventType.COMMENT_CREATED: "created",
    EventType.COMMENT_UPDATED: "updated",
    EventType.COMMENT_DELETED: "deleted",
    EventType.COMMENT_LIKED: "liked",
    EventType.COMMENT_UNLIKED: "unliked",
    EventType.COMMENT_FLAGGED: "flagged",
    EventType.COMMENT_MODERATED: "moderated",
    EventType.REACTION_ADDED: "added",
    EventType.REACTION_UPDATED: "updated",
    EventType.REACTION_REMOVED: "removed",
}


class EventChannel(ABC):
    """Delivery collaborator for interaction events.

    Accepts an event plus the topic it should be published on. No
    acknowledgement is expected beyond the call returning.
    """

    @abstractmethod
    async def send(self, topic: str, event: InteractionEvent) -> None:
        """Publish an event on a topic.

        Args:
            topic: Logical channel name
            event: Event to publish

        Raises:
            Exception: Any delivery failure (caught by the emitter)
        """
        pass


class EventEmitter(Service):
    """Domain service that builds and delivers interaction events.

    While a transaction is open the persistence layer calls ``hold()``.
    Events emitted during the transaction are then queued and only
    delivered by ``release()`` after commit, or dropped by ``discard()``
    on rollback. Without a transaction, events are delivered immediately.
    """

    def __init__(self, channel: EventChannel, settings: EventSettings) -> None:
        """Initialize event emitter.

        Args:
            channel: Event delivery channel
            settings: Topic names and event source
        """
        self.channel = channel
        self.settings = settings
        self._held: Optional[list[InteractionEvent]] = None

    def topics_for(self, event: InteractionEvent) -> list[str]:
        """Select the topics an event is published on."""
        topics = [self.settings.interaction_topic]

        if event.event_type.value.startswith("COMMENT"):
            topics.append(self.settings.comment_topic)
        elif event.event_type.value.startswith("REACTION"):
            topics.append(self.settings.reaction_topic)

        if event.event_type in NOTIFY_EVENT_TYPES:
            topics.append(self.settings.notification_topic)

        return topics

    def hold(self) -> None:
        """Queue emitted events until ``release()`` or ``discard()``."""
        if self._held is None:
            self._held = []

    async def release(self) -> None:
        """Deliver queued events in emission order and stop holding."""
        events, self._held = self._held or [], None
        for event in events:
            await self._deliver(event)

    def discard(self) -> None:
        """Drop queued events and stop holding."""
        if self._held:
            logfire.warn("Discarding events after rollback", count=len(self._held))
        self._held = None

    async def emit(self, event: InteractionEvent) -> None:
        """Emit an event (queued while holding, otherwise delivered now).

        Never raises because of delivery problems.

        Args:
            event: Event to emit
        """
        if self._held is not None:
            self._held.append(event)
            logfire.debug(
                "Event queued until commit",
                event_id=str(event.event_id),
                event_type=event.event_type.value,
            )
            return
        await self._deliver(event)

    async def emit_comment_event(
        self,
        event_type: EventType,
        comment: Comment,
        actor_id: UserId,
        **data: Any,
    ) -> InteractionEvent:
        """Build and emit an event describing a comment mutation.

        Args:
            event_type: Kind of mutation
            comment: Comment after the mutation
            actor_id: User who performed the mutation
            **data: Extra payload fields

        Returns:
            The emitted event
        """
        event_data: dict[str, Any] = {
            "comment_id": comment.id,
            "parent_comment_id": comment.parent_id,
            "action": _ACTIONS[event_type],
            **data,
        }
        event = self._build(event_type, comment.content_id, actor_id, comment, event_data)
        await self.emit(event)
        return event

    async def emit_reaction_event(
        self,
        event_type: EventType,
        reaction: Reaction,
        **data: Any,
    ) -> InteractionEvent:
        """Build and emit an event describing a reaction mutation.

        Args:
            event_type: Kind of mutation
            reaction: Reaction after the mutation (or as it was before removal)
            **data: Extra payload fields

        Returns:
            The emitted event
        """
        event_data: dict[str, Any] = {
            "reaction_id": reaction.id,
            "reaction_type": reaction.reaction_type.value,
            "intensity": reaction.intensity,
            "action": _ACTIONS[event_type],
            **data,
        }
        event = self._build(
            event_type, reaction.content_id, reaction.user_id, reaction, event_data
        )
        await self.emit(event)
        return event

    def _build(
        self,
        event_type: EventType,
        content_id: ContentId,
        actor_id: UserId,
        subject: Comment | Reaction,
        event_data: dict[str, Any],
    ) -> InteractionEvent:
        priority = (
            EventPriority.HIGH
            if event_type in HIGH_PRIORITY_EVENT_TYPES
            else EventPriority.NORMAL
        )
        return InteractionEvent(
            event_type=event_type,
            user_id=actor_id,
            content_id=content_id,
            family_id=subject.family_id,
            interaction_type=_INTERACTION_TYPES[event_type],
            event_data=event_data,
            metadata={"source": self.settings.source, "priority": priority.value},
        )

    async def _deliver(self, event: InteractionEvent) -> None:
        with logfire.span(
            "event_emitter.deliver",
            event_id=str(event.event_id),
            event_type=event.event_type.value,
            content_id=str(event.content_id),
        ):
            for topic in self.topics_for(event):
                try:
                    await self.channel.send(topic, event)
                except Exception as e:
                    logfire.error(
                        "Event delivery failed",
                        topic=topic,
                        event_id=str(event.event_id),
                        event_type=event.event_type.value,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
