"""Interaction event record.

An immutable description of one committed mutation, handed to the event
emitter for delivery to downstream consumers (notifications, feed ranking,
analytics).
"""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from pydantic import Field

from interaction.domain.model.common import DomainModel
from interaction.domain.value import (
    ContentId,
    EventId,
    EventType,
    FamilyId,
    InteractionType,
    UserId,
)

EVENT_VERSION = "1.0"


class InteractionEvent(DomainModel):
    """Interaction event."""

    event_id: EventId = Field(default_factory=lambda: EventId(uuid4()))
    event_type: EventType
    event_version: str = EVENT_VERSION
    timestamp: datetime = Field(default_factory=datetime.now)
    user_id: UserId
    content_id: ContentId
    family_id: Optional[FamilyId] = None
    interaction_type: InteractionType
    event_data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
