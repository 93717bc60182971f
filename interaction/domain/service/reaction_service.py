"""Reaction domain service."""

from collections import Counter, defaultdict
from datetime import datetime
from typing import Any, Callable, Hashable, Iterable, Optional

import logfire
from sqlalchemy.exc import IntegrityError

from interaction.domain.error import ConflictError, NotFoundError, ValidationError
from interaction.domain.model import (
    BreakdownEntry,
    FamilyBreakdown,
    Reaction,
    ReactionSummary,
    ReactionTypeInfo,
    ViewerReaction,
)
from interaction.domain.model.reaction import MAX_INTENSITY, MIN_INTENSITY
from interaction.domain.model.reaction_type import (
    REACTION_CATALOG,
    get_reaction_type_info,
    list_reaction_types,
)
from interaction.domain.repository import ReactionRepository
from interaction.domain.value import (
    ContentId,
    EventType,
    FamilyId,
    ReactionCategory,
    ReactionType,
    UserId,
)

from .base import Service, check_page
from .event_emitter import EventEmitter

INTENSITY_LABELS = {
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Very High",
}

UNSPECIFIED_LABEL = "Unspecified"

_TYPE_ORDER = {reaction_type: index for index, reaction_type in enumerate(REACTION_CATALOG)}


def percentage(count: int, total: int) -> float:
    """Share of ``count`` in ``total`` as a percentage (0.0 when total is 0)."""
    if total == 0:
        return 0.0
    return count / total * 100


def generation_label(generation_level: Optional[int]) -> str:
    if generation_level is None:
        return UNSPECIFIED_LABEL
    return f"Generation {generation_level}"


class ReactionService(Service):
    """Domain service for reaction operations."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        event_emitter: EventEmitter,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            event_emitter: Interaction event emitter
        """
        self.reaction_repository = reaction_repository
        self.event_emitter = event_emitter

    async def upsert_reaction(
        self,
        content_id: ContentId,
        user_id: UserId,
        reaction_type: ReactionType,
        intensity: int = 1,
        family_id: Optional[FamilyId] = None,
        generation_level: Optional[int] = None,
        family_context: Optional[dict[str, Any]] = None,
        relationship_context: Optional[dict[str, Any]] = None,
        emotional_context: Optional[dict[str, Any]] = None,
        cultural_context: Optional[str] = None,
        is_anonymous: bool = False,
        is_private: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ) -> tuple[Reaction, bool]:
        """Create or replace a user's reaction on a content item.

        A user holds at most one reaction per content item. Reacting again
        replaces type, intensity and context of the existing reaction.

        When two upserts for the same pair race, the store's unique
        constraint rejects the second insert. That insert is retried once
        as an update of the row that won.

        Args:
            content_id: Content being reacted to
            user_id: Reacting user
            reaction_type: Reaction type
            intensity: Intensity 1-5
            family_id: Family the reaction is shared within
            generation_level: Reactor's generation level
            family_context: Free-form family context
            relationship_context: Free-form relationship context
            emotional_context: Free-form emotional context
            cultural_context: Cultural tag
            is_anonymous: Hide reactor identity
            is_private: Restrict to family members
            metadata: Free-form metadata

        Returns:
            Tuple of (reaction, was_created)

        Raises:
            ValidationError: If intensity is out of range
            ConflictError: If the row vanished during a race retry
        """
        with logfire.span(
            "reaction_service.upsert_reaction",
            content_id=str(content_id),
            user_id=str(user_id),
            reaction_type=reaction_type.value,
            intensity=intensity,
        ):
            if not MIN_INTENSITY <= intensity <= MAX_INTENSITY:
                raise ValidationError(
                    f"Intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}"
                )

            fields: dict[str, Any] = {
                "reaction_type": reaction_type,
                "intensity": intensity,
                "family_id": family_id,
                "generation_level": generation_level,
                "family_context": family_context,
                "relationship_context": relationship_context,
                "emotional_context": emotional_context,
                "cultural_context": cultural_context,
                "is_anonymous": is_anonymous,
                "is_private": is_private,
                "metadata": dict(metadata or {}),
            }

            existing = await self.reaction_repository.find_by_content_and_user(
                content_id, user_id
            )

            if existing is None:
                now = datetime.now()
                try:
                    created = await self.reaction_repository.save(
                        Reaction(
                            content_id=content_id,
                            user_id=user_id,
                            created_at=now,
                            updated_at=now,
                            **fields,
                        )
                    )
                except IntegrityError:
                    logfire.warn(
                        "Concurrent reaction insert, retrying as update",
                        content_id=str(content_id),
                        user_id=str(user_id),
                    )
                    existing = await self.reaction_repository.find_by_content_and_user(
                        content_id, user_id
                    )
                    if existing is None:
                        raise ConflictError(
                            "Reaction", "concurrent modification, please retry"
                        )
                else:
                    logfire.info(
                        "Reaction added",
                        reaction_id=created.id,
                        content_id=str(content_id),
                        reaction_type=reaction_type.value,
                    )
                    await self.event_emitter.emit_reaction_event(
                        EventType.REACTION_ADDED, created
                    )
                    return created, True

            previous_type = existing.reaction_type
            updated = await self.reaction_repository.update(
                existing.model_copy(update={**fields, "updated_at": datetime.now()})
            )
            if updated is None:
                logfire.warn(
                    "Reaction vanished during update",
                    content_id=str(content_id),
                    user_id=str(user_id),
                )
                raise ConflictError("Reaction", "concurrent modification, please retry")

            logfire.info(
                "Reaction updated",
                reaction_id=updated.id,
                content_id=str(content_id),
                previous_type=previous_type.value,
                reaction_type=reaction_type.value,
            )
            await self.event_emitter.emit_reaction_event(
                EventType.REACTION_UPDATED,
                updated,
                previous_reaction_type=previous_type.value,
            )
            return updated, False

    async def remove_reaction(self, content_id: ContentId, user_id: UserId) -> Reaction:
        """Remove a user's reaction from a content item.

        Args:
            content_id: Content ID
            user_id: User ID

        Returns:
            The removed reaction

        Raises:
            NotFoundError: If the user has no reaction on the content
        """
        with logfire.span(
            "reaction_service.remove_reaction",
            content_id=str(content_id),
            user_id=str(user_id),
        ):
            existing = await self.reaction_repository.find_by_content_and_user(
                content_id, user_id
            )
            deleted = existing is not None and (
                await self.reaction_repository.delete_by_content_and_user(
                    content_id, user_id
                )
            )
            if not deleted:
                logfire.info(
                    "No reaction to remove",
                    content_id=str(content_id),
                    user_id=str(user_id),
                )
                raise NotFoundError("Reaction", f"{content_id}/{user_id}")

            logfire.info(
                "Reaction removed",
                reaction_id=existing.id,
                content_id=str(content_id),
            )
            await self.event_emitter.emit_reaction_event(
                EventType.REACTION_REMOVED, existing
            )
            return existing

    async def get_user_reaction(
        self, content_id: ContentId, user_id: UserId
    ) -> Optional[Reaction]:
        """Get a user's reaction on a content item, if any."""
        return await self.reaction_repository.find_by_content_and_user(
            content_id, user_id
        )

    async def list_by_generation(
        self, generation_level: int, limit: int = 50, offset: int = 0
    ) -> list[Reaction]:
        """List non-private reactions made at a generation level, newest first.

        Raises:
            ValidationError: If the page bounds are invalid
        """
        check_page(limit, offset)
        with logfire.span(
            "reaction_service.list_by_generation", generation_level=generation_level
        ):
            return await self.reaction_repository.find_by_generation_level(
                generation_level, limit=limit, offset=offset
            )

    async def list_by_cultural_context(
        self, cultural_context: str, limit: int = 50, offset: int = 0
    ) -> list[Reaction]:
        """List non-private reactions tagged with a cultural context, newest first.

        Raises:
            ValidationError: If the tag is blank or the page bounds are invalid
        """
        check_page(limit, offset)
        cultural_context = cultural_context.strip()
        if not cultural_context:
            raise ValidationError("Cultural context cannot be empty")
        with logfire.span(
            "reaction_service.list_by_cultural_context",
            cultural_context=cultural_context,
        ):
            return await self.reaction_repository.find_by_cultural_context(
                cultural_context, limit=limit, offset=offset
            )

    def list_reaction_types(
        self, category: Optional[ReactionCategory] = None
    ) -> list[ReactionTypeInfo]:
        """List the reaction type catalog, optionally for one category."""
        return list_reaction_types(category)

    async def summarize_reactions(
        self, content_id: ContentId, viewer_id: Optional[UserId] = None
    ) -> ReactionSummary:
        """Aggregate all reactions on a content item.

        Always computed from the current rows, never cached. Each breakdown
        dimension sums to 100% when there is at least one reaction.

        Args:
            content_id: Content ID
            viewer_id: Viewing user, whose own reaction is included

        Returns:
            Reaction summary
        """
        with logfire.span(
            "reaction_service.summarize_reactions", content_id=str(content_id)
        ):
            reactions = await self.reaction_repository.find_by_content(content_id)
            total = len(reactions)
            unique_reactors = len({r.user_id for r in reactions})

            if unique_reactors != total:
                logfire.warn(
                    "Duplicate reactors found on content",
                    content_id=str(content_id),
                    total=total,
                    unique_reactors=unique_reactors,
                )

            average_intensity = (
                sum(r.intensity for r in reactions) / total if total else 0.0
            )

            viewer_reaction = None
            if viewer_id is not None:
                own = next((r for r in reactions if r.user_id == viewer_id), None)
                if own is not None and own.id is not None:
                    viewer_reaction = ViewerReaction(
                        reaction_id=own.id,
                        reaction_type=own.reaction_type,
                        intensity=own.intensity,
                        created_at=own.created_at,
                    )

            summary = ReactionSummary(
                total_reactions=total,
                unique_reactors=unique_reactors,
                average_intensity=average_intensity,
                by_type=_by_type(reactions),
                by_intensity=_by_intensity(reactions),
                by_generation=_by_generation(reactions, total),
                by_cultural_tag=_breakdown(
                    reactions,
                    total,
                    key=lambda r: r.cultural_context,
                    label=lambda tag: tag if tag is not None else UNSPECIFIED_LABEL,
                ),
                by_family=_by_family(reactions, total),
                by_category=_by_category(reactions),
                viewer_reaction=viewer_reaction,
            )

            logfire.info(
                "Reactions summarized",
                content_id=str(content_id),
                total=total,
                average_intensity=average_intensity,
            )
            return summary


def _breakdown(
    reactions: Iterable[Reaction],
    total: int,
    key: Callable[[Reaction], Hashable],
    label: Callable[[Any], str],
) -> list[BreakdownEntry]:
    """Count reactions per key, most frequent first, ``None`` key last."""
    counts = Counter(key(r) for r in reactions)
    ordered = sorted(
        counts.items(), key=lambda item: (item[0] is None, -item[1], str(item[0]))
    )
    return [
        BreakdownEntry(
            key=value,
            label=label(value),
            count=count,
            percentage=percentage(count, total),
        )
        for value, count in ordered
    ]


def _by_type(reactions: list[Reaction]) -> list[BreakdownEntry]:
    total = len(reactions)
    counts = Counter(r.reaction_type for r in reactions)
    ordered = sorted(counts.items(), key=lambda item: (-item[1], _TYPE_ORDER[item[0]]))
    return [
        BreakdownEntry(
            key=reaction_type,
            label=get_reaction_type_info(reaction_type).display_name,
            count=count,
            percentage=percentage(count, total),
        )
        for reaction_type, count in ordered
    ]


def _by_intensity(reactions: list[Reaction]) -> list[BreakdownEntry]:
    total = len(reactions)
    counts = Counter(r.intensity for r in reactions)
    return [
        BreakdownEntry(
            key=value,
            label=INTENSITY_LABELS[value],
            count=counts[value],
            percentage=percentage(counts[value], total),
        )
        for value in range(MIN_INTENSITY, MAX_INTENSITY + 1)
    ]


def _by_generation(reactions: list[Reaction], total: int) -> list[BreakdownEntry]:
    """Generation levels ascending, unspecified last."""
    counts = Counter(r.generation_level for r in reactions)
    ordered = sorted(counts.items(), key=lambda item: (item[0] is None, item[0] or 0))
    return [
        BreakdownEntry(
            key=level,
            label=generation_label(level),
            count=count,
            percentage=percentage(count, total),
        )
        for level, count in ordered
    ]


def _by_family(reactions: list[Reaction], total: int) -> list[FamilyBreakdown]:
    groups: dict[Optional[FamilyId], list[Reaction]] = defaultdict(list)
    for reaction in reactions:
        groups[reaction.family_id].append(reaction)

    ordered = sorted(
        groups.items(),
        key=lambda item: (item[0] is None, -len(item[1]), str(item[0])),
    )
    return [
        FamilyBreakdown(
            family_id=family_id,
            count=len(members),
            percentage=percentage(len(members), total),
            # Nested shares are relative to the family's own count
            by_generation=_by_generation(members, len(members)),
        )
        for family_id, members in ordered
    ]


def _by_category(reactions: list[Reaction]) -> list[BreakdownEntry]:
    total = len(reactions)
    counts = Counter(r.category for r in reactions)
    return [
        BreakdownEntry(
            key=category,
            label=category.value.capitalize(),
            count=counts[category],
            percentage=percentage(counts[category], total),
        )
        for category in ReactionCategory
    ]