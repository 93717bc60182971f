"""Unit tests for the in-memory repositories used by the test container."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from interaction.domain.model import Comment, CommentLike, Reaction
from interaction.domain.value import (
    CommentId,
    CommentStatus,
    ContentId,
    ModerationStatus,
    ReactionType,
    UserId,
)
from interaction.persistence.repository.inmemory import (
    InMemoryCommentLikeRepository,
    InMemoryCommentRepository,
    InMemoryReactionRepository,
)


def make_comment(parent: Comment | None = None, **overrides) -> Comment:
    fields = {
        "content_id": parent.content_id if parent else ContentId(uuid4()),
        "author_id": UserId(uuid4()),
        "text": "text",
        "parent_id": parent.id if parent else None,
        "depth": parent.depth + 1 if parent else 0,
    }
    fields.update(overrides)
    return Comment(**fields)


class TestInMemoryCommentRepository:
    """Tests for InMemoryCommentRepository."""

    @pytest.mark.asyncio
    async def test_save_assigns_increasing_ids(self):
        repo = InMemoryCommentRepository()

        first = await repo.save(make_comment())
        second = await repo.save(make_comment())

        assert first.id == CommentId(1)
        assert second.id == CommentId(2)

    @pytest.mark.asyncio
    async def test_stale_save_keeps_counters(self):
        """Saving an older copy does not roll back counter increments."""
        # Arrange
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment())
        stale = comment
        await repo.increment_like_count(comment.id)
        await repo.increment_reply_count(comment.id)

        # Act
        await repo.save(stale.model_copy(update={"text": "changed"}))

        # Assert
        stored = await repo.find_by_id(comment.id)
        assert stored.text == "changed"
        assert stored.like_count == 1
        assert stored.reply_count == 1

    @pytest.mark.asyncio
    async def test_counters_floor_at_zero(self):
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment())

        await repo.decrement_like_count(comment.id)
        await repo.decrement_reply_count(comment.id)

        stored = await repo.find_by_id(comment.id)
        assert stored.like_count == 0
        assert stored.reply_count == 0

    @pytest.mark.asyncio
    async def test_set_counters_overwrites(self):
        repo = InMemoryCommentRepository()
        comment = await repo.save(make_comment())

        await repo.set_counters(comment.id, reply_count=3, like_count=7)

        stored = await repo.find_by_id(comment.id)
        assert (stored.reply_count, stored.like_count) == (3, 7)

    @pytest.mark.asyncio
    async def test_find_children_respects_fanout(self):
        """Children come back per parent, oldest first, capped per parent."""
        # Arrange
        repo = InMemoryCommentRepository()
        root = await repo.save(make_comment())
        replies = [await repo.save(make_comment(parent=root)) for _ in range(3)]

        # Act
        children = await repo.find_children_of([root.id], limit_per_parent=2)

        # Assert
        assert [c.id for c in children] == [replies[0].id, replies[1].id]

    @pytest.mark.asyncio
    async def test_moderation_queue_skips_deleted(self):
        repo = InMemoryCommentRepository()
        pending = await repo.save(make_comment())
        deleted = await repo.save(make_comment())
        await repo.save(deleted.model_copy(update={"status": CommentStatus.DELETED}))
        await repo.save(make_comment(moderation_status=ModerationStatus.APPROVED))

        queue = await repo.find_by_moderation_status(
            [ModerationStatus.PENDING, ModerationStatus.FLAGGED]
        )

        assert [c.id for c in queue] == [pending.id]


    @pytest.mark.asyncio
    async def test_find_replies_filters_and_pages(self):
        repo = InMemoryCommentRepository()
        parent = await repo.save(make_comment())
        approved = [
            await repo.save(
                make_comment(parent, moderation_status=ModerationStatus.APPROVED)
            )
            for _ in range(3)
        ]
        await repo.save(make_comment(parent, moderation_status=ModerationStatus.PENDING))
        await repo.save(
            make_comment(
                parent,
                status=CommentStatus.DELETED,
                moderation_status=ModerationStatus.APPROVED,
            )
        )

        page = await repo.find_replies(
            parent.id, [ModerationStatus.APPROVED], limit=2, offset=1
        )
        everything = await repo.find_replies(parent.id)

        assert [c.id for c in page] == [approved[1].id, approved[2].id]
        assert len(everything) == 4  # Deleted replies are never listed

    @pytest.mark.asyncio
    async def test_count_hashtags_since_ignores_hidden_and_old(self):
        repo = InMemoryCommentRepository()
        now = datetime.now()
        await repo.save(
            make_comment(hashtags=["a", "b"], moderation_status=ModerationStatus.APPROVED)
        )
        await repo.save(
            make_comment(hashtags=["b"], moderation_status=ModerationStatus.AUTO_APPROVED)
        )
        await repo.save(make_comment(hashtags=["c"]))  # Pending
        await repo.save(
            make_comment(
                hashtags=["a"],
                moderation_status=ModerationStatus.APPROVED,
                created_at=now - timedelta(days=10),
            )
        )

        counts = await repo.count_hashtags_since(now - timedelta(days=7), limit=5)

        assert counts == [("b", 2), ("a", 1)]

    @pytest.mark.asyncio
    async def test_find_visible_by_cultural_tag(self):
        repo = InMemoryCommentRepository()
        tagged = await repo.save(
            make_comment(cultural_tags=["eid"], moderation_status=ModerationStatus.APPROVED)
        )
        await repo.save(make_comment(cultural_tags=["eid"]))  # Pending
        await repo.save(
            make_comment(
                cultural_tags=["eid"],
                moderation_status=ModerationStatus.APPROVED,
                is_private=True,
            )
        )

        found = await repo.find_visible_by_cultural_tag("eid")

        assert [c.id for c in found] == [tagged.id]


class TestInMemoryCommentLikeRepository:
    """Tests for InMemoryCommentLikeRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_like_rejected(self):
        repo = InMemoryCommentLikeRepository()
        like = CommentLike(comment_id=CommentId(1), user_id=UserId(uuid4()))
        await repo.save(like)

        with pytest.raises(IntegrityError):
            await repo.save(like)

        assert await repo.count_by_comment(CommentId(1)) == 1


class TestInMemoryReactionRepository:
    """Tests for InMemoryReactionRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_reaction_rejected(self):
        """One reaction per (content, user), as the unique constraint."""
        # Arrange
        repo = InMemoryReactionRepository()
        content_id = ContentId(uuid4())
        user_id = UserId(uuid4())
        await repo.save(
            Reaction(content_id=content_id, user_id=user_id, reaction_type=ReactionType.LIKE)
        )

        # Act & Assert
        with pytest.raises(IntegrityError):
            await repo.save(
                Reaction(
                    content_id=content_id, user_id=user_id, reaction_type=ReactionType.WOW
                )
            )

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self):
        repo = InMemoryReactionRepository()
        saved = await repo.save(
            Reaction(
                content_id=ContentId(uuid4()),
                user_id=UserId(uuid4()),
                reaction_type=ReactionType.LIKE,
            )
        )

        updated = await repo.update(
            saved.model_copy(update={"reaction_type": ReactionType.LOVE})
        )

        assert updated.reaction_type == ReactionType.LOVE
        assert updated.created_at == saved.created_at

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self):
        repo = InMemoryReactionRepository()
        reaction = Reaction(
            id=99,
            content_id=ContentId(uuid4()),
            user_id=UserId(uuid4()),
            reaction_type=ReactionType.LIKE,
        )

        assert await repo.update(reaction) is None

    @pytest.mark.asyncio
    async def test_find_by_generation_level_skips_private(self):
        repo = InMemoryReactionRepository()
        public = await repo.save(
            Reaction(
                content_id=ContentId(uuid4()),
                user_id=UserId(uuid4()),
                reaction_type=ReactionType.GRANDPARENT,
                generation_level=0,
            )
        )
        await repo.save(
            Reaction(
                content_id=ContentId(uuid4()),
                user_id=UserId(uuid4()),
                reaction_type=ReactionType.GRANDPARENT,
                generation_level=0,
                is_private=True,
            )
        )

        found = await repo.find_by_generation_level(0)

        assert [r.id for r in found] == [public.id]
