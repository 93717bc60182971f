"""Unit tests for the reaction read use cases."""

from uuid import uuid4

import pytest

from interaction.application.usecase.reaction import (
    GetReactionSummaryRequest,
    GetReactionSummaryUseCase,
    GetUserReactionRequest,
    GetUserReactionUseCase,
    ListReactionTypesUseCase,
)
from interaction.domain.service import ReactionService
from interaction.domain.value import (
    ContentId,
    FamilyId,
    ReactionCategory,
    ReactionType,
    UserId,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetReactionSummaryUseCase:
    """Tests for GetReactionSummaryUseCase."""

    @pytest.mark.asyncio
    async def test_summary_rounds_percentages(self, unit_env):
        """Percentages are rounded to two decimals for display."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        content_id = ContentId(uuid4())
        family_id = FamilyId(uuid4())
        viewer_id = UserId(uuid4())
        await reaction_service.upsert_reaction(
            content_id, viewer_id, ReactionType.LIKE, intensity=1, family_id=family_id
        )
        await reaction_service.upsert_reaction(
            content_id, UserId(uuid4()), ReactionType.LIKE, intensity=2
        )
        await reaction_service.upsert_reaction(
            content_id,
            UserId(uuid4()),
            ReactionType.NAMASTE,
            intensity=5,
            generation_level=1,
            cultural_context="diwali",
        )
        use_case = GetReactionSummaryUseCase(reaction_service=reaction_service)

        # Act
        response = await use_case.execute(
            GetReactionSummaryRequest(
                content_id=str(content_id), viewer_id=str(viewer_id)
            )
        )

        # Assert
        assert response.total_reactions == 3
        assert response.unique_reactors == 3
        assert response.average_intensity == 2.67
        assert [(b.key, b.percentage) for b in response.by_type] == [
            ("LIKE", 66.67),
            ("NAMASTE", 33.33),
        ]
        assert response.by_type[0].label == "Like"
        assert len(response.by_intensity) == 5
        assert response.by_intensity[2].count == 0
        assert response.by_generation[-1].label == "Unspecified"
        assert response.by_cultural_tag[0].key == "diwali"
        assert response.by_family[0].family_id == str(family_id)
        assert response.by_family[1].family_id is None
        assert response.by_family[1].count == 2
        categories = {b.key: b.count for b in response.by_category}
        assert categories == {"CORE": 2, "FAMILY": 0, "GENERATIONAL": 0, "CULTURAL": 1}
        assert response.viewer_reaction is not None
        assert response.viewer_reaction.reaction_type == "LIKE"

    @pytest.mark.asyncio
    async def test_summary_without_reactions(self, unit_env):
        """Content without reactions has an empty summary."""
        # Arrange
        use_case = GetReactionSummaryUseCase(
            reaction_service=await unit_env.get(ReactionService)
        )

        # Act
        response = await use_case.execute(
            GetReactionSummaryRequest(content_id=str(uuid4()))
        )

        # Assert
        assert response.total_reactions == 0
        assert response.average_intensity == 0.0
        assert response.by_type == []
        assert all(b.percentage == 0.0 for b in response.by_intensity)
        assert response.viewer_reaction is None


class TestGetUserReactionUseCase:
    """Tests for GetUserReactionUseCase."""

    @pytest.mark.asyncio
    async def test_own_reaction(self, unit_env):
        """Returns the actor's reaction when present."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        content_id = ContentId(uuid4())
        user_id = UserId(uuid4())
        await reaction_service.upsert_reaction(
            content_id, user_id, ReactionType.PRIDE, intensity=3
        )
        use_case = GetUserReactionUseCase(reaction_service=reaction_service)

        # Act
        response = await use_case.execute(
            GetUserReactionRequest(content_id=str(content_id), user_id=str(user_id))
        )

        # Assert
        assert response.reaction is not None
        assert response.reaction.reaction_type == "PRIDE"

    @pytest.mark.asyncio
    async def test_anonymous_viewer_has_no_reaction(self, unit_env):
        """Anonymous viewers get an empty result."""
        # Arrange
        use_case = GetUserReactionUseCase(
            reaction_service=await unit_env.get(ReactionService)
        )

        # Act
        response = await use_case.execute(
            GetUserReactionRequest(content_id=str(uuid4()))
        )

        # Assert
        assert response.reaction is None


class TestListReactionTypesUseCase:
    """Tests for ListReactionTypesUseCase."""

    @pytest.mark.asyncio
    async def test_full_catalog(self, unit_env):
        """Without a filter every reaction type is listed."""
        # Arrange
        use_case = ListReactionTypesUseCase(
            reaction_service=await unit_env.get(ReactionService)
        )

        # Act
        response = await use_case.execute()

        # Assert
        assert response.total == len(ReactionType)
        assert response.reaction_types[0].reaction_type == "LIKE"

    @pytest.mark.asyncio
    async def test_filter_by_category(self, unit_env):
        """Category filter keeps only matching types."""
        # Arrange
        use_case = ListReactionTypesUseCase(
            reaction_service=await unit_env.get(ReactionService)
        )

        # Act
        response = await use_case.execute(ReactionCategory.GENERATIONAL)

        # Assert
        assert [t.reaction_type for t in response.reaction_types] == [
            "GRANDPARENT",
            "PARENT",
            "CHILD",
            "SIBLING",
        ]
