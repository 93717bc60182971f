"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from interaction.adapter.directory import InMemoryProfileDirectory
from interaction.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from interaction.domain.error import NotFoundError, ValidationError
from interaction.domain.service import CommentService, ProfileService, UserProfile
from interaction.domain.value import FamilyId, UserId
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def build_use_case(unit_env) -> CreateCommentUseCase:
    return CreateCommentUseCase(
        comment_service=await unit_env.get(CommentService),
        profile_service=await unit_env.get(ProfileService),
    )


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_create_comment_decorates_author(self, unit_env):
        """Author profile is attached to the created comment."""
        # Arrange
        use_case = await build_use_case(unit_env)
        directory = await unit_env.get(InMemoryProfileDirectory)
        author_id = UserId(uuid4())
        family_id = FamilyId(uuid4())
        directory.add_profile(
            UserProfile(
                user_id=author_id,
                display_name="Grandma Rose",
                avatar_url="https://example.com/rose.png",
                generation_level=1,
                family_ids=[family_id],
            )
        )
        request = CreateCommentRequest(
            content_id=str(uuid4()),
            author_id=str(author_id),
            text="What a lovely photo!",
            hashtags=["#Reunion"],
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        comment = response.comment
        assert comment.author_id == str(author_id)
        assert comment.author_name == "Grandma Rose"
        assert comment.author_avatar == "https://example.com/rose.png"
        # The author always shares family and generation with themself
        assert comment.is_from_same_family is True
        assert comment.is_from_same_generation is True
        assert comment.relationship_to_viewer is None
        assert comment.depth == 0
        assert comment.status == "ACTIVE"
        assert comment.moderation_status == "PENDING"

    @pytest.mark.asyncio
    async def test_create_comment_without_profile(self, unit_env):
        """Unknown authors get an undecorated comment."""
        # Arrange
        use_case = await build_use_case(unit_env)
        request = CreateCommentRequest(
            content_id=str(uuid4()), author_id=str(uuid4()), text="Hello"
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.comment.author_name is None
        assert response.comment.is_from_same_family is False

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Reply is placed one level below its parent."""
        # Arrange
        use_case = await build_use_case(unit_env)
        content_id = str(uuid4())
        parent = await use_case.execute(
            CreateCommentRequest(
                content_id=content_id, author_id=str(uuid4()), text="Parent"
            )
        )

        # Act
        reply = await use_case.execute(
            CreateCommentRequest(
                content_id=content_id,
                author_id=str(uuid4()),
                text="Reply",
                parent_id=parent.comment.comment_id,
            )
        )

        # Assert
        assert reply.comment.parent_id == parent.comment.comment_id
        assert reply.comment.depth == 1

    @pytest.mark.asyncio
    async def test_create_reply_to_missing_parent(self, unit_env):
        """Replying to an unknown comment raises NotFoundError."""
        # Arrange
        use_case = await build_use_case(unit_env)
        request = CreateCommentRequest(
            content_id=str(uuid4()),
            author_id=str(uuid4()),
            text="Orphan",
            parent_id=99999,
        )

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_create_comment_empty_text(self, unit_env):
        """Whitespace-only text raises ValidationError."""
        # Arrange
        use_case = await build_use_case(unit_env)
        request = CreateCommentRequest(
            content_id=str(uuid4()), author_id=str(uuid4()), text="   "
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_anonymous_comment_shows_author_to_themself(self, unit_env):
        """The author still sees their own ID on an anonymous comment."""
        # Arrange
        use_case = await build_use_case(unit_env)
        author_id = str(uuid4())
        request = CreateCommentRequest(
            content_id=str(uuid4()),
            author_id=author_id,
            text="Guess who",
            is_anonymous=True,
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.comment.is_anonymous is True
        assert response.comment.author_id == author_id
