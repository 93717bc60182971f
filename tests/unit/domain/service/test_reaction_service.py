"""Unit tests for ReactionService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from interaction.adapter.events import InMemoryEventChannel
from interaction.domain.error import ConflictError, NotFoundError, ValidationError
from interaction.domain.model import Reaction
from interaction.domain.repository import ReactionRepository
from interaction.domain.service import ReactionService
from interaction.domain.service.reaction_service import UNSPECIFIED_LABEL, percentage
from interaction.domain.value import (
    ContentId,
    EventType,
    FamilyId,
    ReactionCategory,
    ReactionType,
    UserId,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


def new_user() -> UserId:
    return UserId(uuid4())


def new_content() -> ContentId:
    return ContentId(uuid4())


def entry(breakdown, key):
    return next(e for e in breakdown if e.key == key)


class TestUpsertReaction:
    """Tests for upsert_reaction method."""

    @pytest.mark.asyncio
    async def test_first_reaction_is_created(self, unit_env):
        """First reaction by a user on content is inserted."""
        # Arrange
        service = await unit_env.get(ReactionService)
        content_id = new_content()
        user_id = new_user()

        # Act
        reaction, created = await service.upsert_reaction(
            content_id, user_id, ReactionType.LIKE, intensity=2
        )

        # Assert
        assert created is True
        assert reaction.id is not None
        assert reaction.reaction_type == ReactionType.LIKE
        assert reaction.intensity == 2
        assert reaction.category == ReactionCategory.CORE

    @pytest.mark.asyncio
    async def test_second_reaction_replaces_first(self, unit_env):
        """Reacting again updates the single row for (content, user)."""
        # Arrange
        service = await unit_env.get(ReactionService)
        repo = await unit_env.get(ReactionRepository)
        content_id = new_content()
        user_id = new_user()
        first, _ = await service.upsert_reaction(
            content_id, user_id, ReactionType.LIKE, intensity=2
        )

        # Act
        second, created = await service.upsert_reaction(
            content_id, user_id, ReactionType.LOVE, intensity=4
        )

        # Assert
        assert created is False
        assert second.id == first.id
        assert second.created_at == first.created_at
        stored = await repo.find_by_content(content_id)
        assert len(stored) == 1
        assert stored[0].reaction_type == ReactionType.LOVE

        summary = await service.summarize_reactions(content_id)
        assert summary.total_reactions == 1
        assert summary.average_intensity == 4.0

    @pytest.mark.parametrize("intensity", [0, 6, -1])
    @pytest.mark.asyncio
    async def test_out_of_range_intensity_is_rejected(self, unit_env, intensity):
        """Intensity must stay within 1-5."""
        # Arrange
        service = await unit_env.get(ReactionService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.upsert_reaction(
                new_content(), new_user(), ReactionType.LIKE, intensity=intensity
            )

    @pytest.mark.asyncio
    async def test_events_for_add_and_update(self, unit_env):
        """Adds notify, updates carry the previous type and do not notify."""
        # Arrange
        service = await unit_env.get(ReactionService)
        channel = await unit_env.get(InMemoryEventChannel)
        settings = service.event_emitter.settings
        content_id = new_content()
        user_id = new_user()

        # Act
        await service.upsert_reaction(content_id, user_id, ReactionType.LIKE)
        await service.upsert_reaction(content_id, user_id, ReactionType.BLESSING)

        # Assert
        reaction_events = channel.events(settings.reaction_topic)
        assert [e.event_type for e in reaction_events] == [
            EventType.REACTION_ADDED,
            EventType.REACTION_UPDATED,
        ]
        assert reaction_events[1].event_data["previous_reaction_type"] == "LIKE"
        notifications = channel.events(settings.notification_topic)
        assert [e.event_type for e in notifications] == [EventType.REACTION_ADDED]

    @pytest.mark.asyncio
    async def test_insert_race_falls_back_to_update(self, unit_env):
        """A unique violation on insert is retried as an update of the winner."""
        # Arrange
        service = await unit_env.get(ReactionService)
        repo = await unit_env.get(ReactionRepository)
        content_id = new_content()
        user_id = new_user()
        winner = await repo.save(
            Reaction(content_id=content_id, user_id=user_id, reaction_type=ReactionType.WOW)
        )
        original_find = repo.find_by_content_and_user
        calls = []

        async def stale_then_fresh(c_id, u_id):
            # First lookup misses the concurrent insert
            calls.append((c_id, u_id))
            if len(calls) == 1:
                return None
            return await original_find(c_id, u_id)

        repo.find_by_content_and_user = stale_then_fresh

        # Act
        reaction, created = await service.upsert_reaction(
            content_id, user_id, ReactionType.SAD, intensity=3
        )

        # Assert
        assert created is False
        assert reaction.id == winner.id
        assert reaction.reaction_type == ReactionType.SAD

    @pytest.mark.asyncio
    async def test_insert_race_with_vanished_row_raises_conflict(self, unit_env):
        """If the competing row is gone by the retry, report a conflict."""
        # Arrange
        service = await unit_env.get(ReactionService)
        repo = await unit_env.get(ReactionRepository)

        async def always_missing(c_id, u_id):
            return None

        async def duplicate(reaction):
            raise IntegrityError("Duplicate reaction", None, Exception())

        repo.find_by_content_and_user = always_missing
        repo.save = duplicate

        # Act & Assert
        with pytest.raises(ConflictError):
            await service.upsert_reaction(new_content(), new_user(), ReactionType.LIKE)


class TestRemoveReaction:
    """Tests for remove_reaction method."""

    @pytest.mark.asyncio
    async def test_remove_existing_reaction(self, unit_env):
        """Removing deletes the row and returns what was removed."""
        # Arrange
        service = await unit_env.get(ReactionService)
        content_id = new_content()
        user_id = new_user()
        added, _ = await service.upsert_reaction(content_id, user_id, ReactionType.PRIDE)

        # Act
        removed = await service.remove_reaction(content_id, user_id)

        # Assert
        assert removed.id == added.id
        assert await service.get_user_reaction(content_id, user_id) is None
        summary = await service.summarize_reactions(content_id)
        assert summary.total_reactions == 0

    @pytest.mark.asyncio
    async def test_remove_missing_reaction_raises_not_found(self, unit_env):
        """Removing a reaction that does not exist fails."""
        # Arrange
        service = await unit_env.get(ReactionService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.remove_reaction(new_content(), new_user())


class TestSummarizeReactions:
    """Tests for summarize_reactions method."""

    @pytest.mark.asyncio
    async def test_empty_content_has_zero_summary(self, unit_env):
        """No reactions means zero totals and no division errors."""
        # Arrange
        service = await unit_env.get(ReactionService)

        # Act
        summary = await service.summarize_reactions(new_content(), new_user())

        # Assert
        assert summary.total_reactions == 0
        assert summary.unique_reactors == 0
        assert summary.average_intensity == 0.0
        assert summary.by_type == []
        assert [e.count for e in summary.by_intensity] == [0, 0, 0, 0, 0]
        assert all(e.percentage == 0.0 for e in summary.by_intensity)
        assert all(e.percentage == 0.0 for e in summary.by_category)
        assert summary.viewer_reaction is None

    @pytest.mark.asyncio
    async def test_breakdowns_sum_to_one_hundred(self, unit_env):
        """Every dimension accounts for all reactions."""
        # Arrange
        service = await unit_env.get(ReactionService)
        content_id = new_content()
        family_a = FamilyId(uuid4())
        family_b = FamilyId(uuid4())
        viewer_id = new_user()
        await service.upsert_reaction(
            content_id, viewer_id, ReactionType.LOVE, 5,
            family_id=family_a, generation_level=1, cultural_context="diwali",
        )
        await service.upsert_reaction(
            content_id, new_user(), ReactionType.LOVE, 3,
            family_id=family_a, generation_level=2,
        )
        await service.upsert_reaction(
            content_id, new_user(), ReactionType.BLESSING, 1,
            family_id=family_b, generation_level=2, cultural_context="diwali",
        )

        # Act
        summary = await service.summarize_reactions(content_id, viewer_id)

        # Assert
        assert summary.total_reactions == 3
        assert summary.unique_reactors == 3
        assert summary.average_intensity == pytest.approx(3.0)
        for breakdown in (
            summary.by_type,
            summary.by_intensity,
            summary.by_generation,
            summary.by_cultural_tag,
            summary.by_category,
            summary.by_family,
        ):
            assert sum(e.percentage for e in breakdown) == pytest.approx(100.0)
            assert sum(e.count for e in breakdown) == 3

        assert [e.key for e in summary.by_type] == [
            ReactionType.LOVE,
            ReactionType.BLESSING,
        ]
        assert entry(summary.by_type, ReactionType.LOVE).percentage == pytest.approx(
            200 / 3
        )
        assert entry(summary.by_category, ReactionCategory.FAMILY).count == 1
        assert entry(summary.by_cultural_tag, None).label == UNSPECIFIED_LABEL

        family = next(f for f in summary.by_family if f.family_id == family_a)
        assert family.count == 2
        assert sum(g.percentage for g in family.by_generation) == pytest.approx(100.0)

        assert summary.viewer_reaction is not None
        assert summary.viewer_reaction.reaction_type == ReactionType.LOVE
        assert summary.viewer_reaction.intensity == 5

    @pytest.mark.asyncio
    async def test_summary_reflects_current_rows(self, unit_env):
        """Aggregates are recomputed after every change."""
        # Arrange
        service = await unit_env.get(ReactionService)
        content_id = new_content()
        user_a = new_user()
        await service.upsert_reaction(content_id, user_a, ReactionType.LIKE, 1)
        await service.upsert_reaction(content_id, new_user(), ReactionType.LIKE, 5)

        # Act
        before = await service.summarize_reactions(content_id)
        await service.remove_reaction(content_id, user_a)
        after = await service.summarize_reactions(content_id)

        # Assert
        assert before.average_intensity == pytest.approx(3.0)
        assert after.average_intensity == pytest.approx(5.0)
        assert after.total_reactions == 1


class TestPercentage:
    """Tests for the percentage helper."""

    def test_zero_denominator_is_zero(self):
        assert percentage(3, 0) == 0.0

    def test_full_precision(self):
        assert percentage(1, 3) == pytest.approx(33.3333333)


class TestReactionTypes:
    """Tests for the reaction type catalog lookups."""

    @pytest.mark.asyncio
    async def test_filter_by_category(self, unit_env):
        """Only the requested category is returned."""
        # Arrange
        service = await unit_env.get(ReactionService)

        # Act
        generational = service.list_reaction_types(ReactionCategory.GENERATIONAL)

        # Assert
        assert [t.reaction_type for t in generational] == [
            ReactionType.GRANDPARENT,
            ReactionType.PARENT,
            ReactionType.CHILD,
            ReactionType.SIBLING,
        ]
        assert len(service.list_reaction_types()) == len(ReactionType)


class TestBrowseReactions:
    """Tests for list_by_generation and list_by_cultural_context methods."""

    @pytest.mark.asyncio
    async def test_generation_feed_skips_private_newest_first(self, unit_env):
        # Arrange
        service = await unit_env.get(ReactionService)
        older, _ = await service.upsert_reaction(
            new_content(), new_user(), ReactionType.BLESSING, generation_level=1
        )
        newer, _ = await service.upsert_reaction(
            new_content(), new_user(), ReactionType.PRIDE, generation_level=1
        )
        await service.upsert_reaction(
            new_content(),
            new_user(),
            ReactionType.LIKE,
            generation_level=1,
            is_private=True,
        )
        await service.upsert_reaction(
            new_content(), new_user(), ReactionType.LIKE, generation_level=2
        )

        # Act
        page = await service.list_by_generation(1)
        second_page = await service.list_by_generation(1, limit=1, offset=1)

        # Assert
        assert [r.id for r in page] == [newer.id, older.id]
        assert [r.id for r in second_page] == [older.id]

    @pytest.mark.asyncio
    async def test_cultural_context_feed(self, unit_env):
        # Arrange
        service = await unit_env.get(ReactionService)
        namaste, _ = await service.upsert_reaction(
            new_content(), new_user(), ReactionType.NAMASTE, cultural_context="hindu"
        )
        await service.upsert_reaction(
            new_content(), new_user(), ReactionType.PRAYER, cultural_context="sikh"
        )

        # Act
        reactions = await service.list_by_cultural_context("hindu")

        # Assert
        assert [r.id for r in reactions] == [namaste.id]

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, unit_env):
        service = await unit_env.get(ReactionService)

        with pytest.raises(ValidationError):
            await service.list_by_generation(1, limit=0)
        with pytest.raises(ValidationError):
            await service.list_by_cultural_context("  ")
