"""Unit tests for ProfileService."""

from uuid import uuid4

import pytest

from interaction.adapter.directory import InMemoryProfileDirectory
from interaction.domain.service import (
    AuthorContext,
    ProfileDirectory,
    ProfileService,
    UserProfile,
)
from interaction.domain.value import FamilyId, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDescribeAuthors:
    """Tests for describe_authors method."""

    @pytest.mark.asyncio
    async def test_family_generation_and_relationship(self, unit_env):
        """Context reflects shared families, generation and relationship."""
        # Arrange
        service = await unit_env.get(ProfileService)
        directory = await unit_env.get(InMemoryProfileDirectory)
        family_id = FamilyId(uuid4())
        viewer_id = UserId(uuid4())
        sister_id = UserId(uuid4())
        stranger_id = UserId(uuid4())
        directory.add_profile(
            UserProfile(
                user_id=viewer_id,
                generation_level=2,
                family_ids=[family_id, FamilyId(uuid4())],
            )
        )
        directory.add_profile(
            UserProfile(
                user_id=sister_id,
                display_name="Maya",
                generation_level=2,
                family_ids=[family_id],
            )
        )
        directory.add_profile(
            UserProfile(user_id=stranger_id, display_name="Sam", generation_level=1)
        )
        directory.add_relationship(viewer_id, sister_id, "sister")

        # Act
        contexts = await service.describe_authors(
            [sister_id, stranger_id, sister_id], viewer_id
        )

        # Assert
        assert list(contexts) == [sister_id, stranger_id]
        assert contexts[sister_id] == AuthorContext(
            author_name="Maya",
            is_from_same_family=True,
            is_from_same_generation=True,
            relationship_to_viewer="sister",
        )
        assert contexts[stranger_id].author_name == "Sam"
        assert contexts[stranger_id].is_from_same_family is False
        assert contexts[stranger_id].is_from_same_generation is False
        assert contexts[stranger_id].relationship_to_viewer is None

    @pytest.mark.asyncio
    async def test_anonymous_viewer(self, unit_env):
        """Without a viewer only profile fields are filled in."""
        # Arrange
        service = await unit_env.get(ProfileService)
        directory = await unit_env.get(InMemoryProfileDirectory)
        author_id = UserId(uuid4())
        directory.add_profile(
            UserProfile(
                user_id=author_id,
                display_name="Pop",
                generation_level=1,
                family_ids=[FamilyId(uuid4())],
            )
        )

        # Act
        contexts = await service.describe_authors([author_id], None)

        # Assert
        assert contexts[author_id].author_name == "Pop"
        assert contexts[author_id].is_from_same_family is False
        assert contexts[author_id].is_from_same_generation is False

    @pytest.mark.asyncio
    async def test_unknown_author(self, unit_env):
        """Authors missing from the directory get an empty context."""
        # Arrange
        service = await unit_env.get(ProfileService)
        author_id = UserId(uuid4())

        # Act
        contexts = await service.describe_authors([author_id], UserId(uuid4()))

        # Assert
        assert contexts[author_id] == AuthorContext()

    @pytest.mark.asyncio
    async def test_directory_outage_leaves_responses_undecorated(self, unit_env):
        """Lookup failures degrade to empty context instead of raising."""
        # Arrange
        service = await unit_env.get(ProfileService)
        directory = await unit_env.get(InMemoryProfileDirectory)
        author_id = UserId(uuid4())
        directory.add_profile(UserProfile(user_id=author_id, display_name="Ana"))
        directory.unavailable = True

        # Act
        contexts = await service.describe_authors([author_id], UserId(uuid4()))
        profile = await service.get_profile(author_id)

        # Assert
        assert contexts[author_id] == AuthorContext()
        assert profile is None


class TestProfileDirectoryInterface:
    """Tests for the ProfileDirectory contract."""

    def test_cannot_instantiate_interface(self):
        with pytest.raises(TypeError):
            ProfileDirectory()

    def test_partial_implementation_rejected(self):
        """Implementations must provide every lookup."""

        class ProfilesOnly(ProfileDirectory):
            async def get_profile(self, user_id):
                return None

        with pytest.raises(TypeError):
            ProfilesOnly()
