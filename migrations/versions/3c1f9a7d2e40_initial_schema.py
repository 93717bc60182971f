"""initial_schema

Create the schema for the interaction service:
- Comments (threaded via parent_id, moderation and visibility status,
  denormalized reply/like/reaction counters)
- Comment likes (one per user and comment)
- Reactions (one per user and content item, intensity 1-5)

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("content_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.BigInteger(), nullable=True),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "mentions",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "hashtags",
            postgresql.ARRAY(sa.String(100)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "media_urls", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"
        ),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("edit_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "edit_history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="ACTIVE"),
        sa.Column(
            "moderation_status",
            sa.String(20),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("family_id", sa.UUID(), nullable=True),
        sa.Column("generation_level", sa.Integer(), nullable=True),
        sa.Column("family_context", postgresql.JSONB(), nullable=True),
        sa.Column("relationship_context", postgresql.JSONB(), nullable=True),
        sa.Column(
            "cultural_tags",
            postgresql.ARRAY(sa.String(100)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("sentiment_score", sa.Float(), nullable=True),
        sa.Column("language_code", sa.String(5), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "metadata",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("reply_count >= 0", name="ck_comments_reply_count"),
        sa.CheckConstraint("like_count >= 0", name="ck_comments_like_count"),
        sa.CheckConstraint("edit_count >= 0", name="ck_comments_edit_count"),
        sa.CheckConstraint(
            "(parent_id IS NULL) = (depth = 0)", name="ck_comments_parent_depth"
        ),
    )

    # Reply listing and per-content listing are both ordered by creation time
    op.create_index(
        "idx_comments_parent_id_created_at", "comments", ["parent_id", "created_at"]
    )
    op.create_index(
        "idx_comments_content_id_created_at", "comments", ["content_id", "created_at"]
    )
    op.create_index("idx_comments_author_id", "comments", ["author_id"])
    op.create_index(
        "idx_comments_moderation_status", "comments", ["moderation_status"]
    )
    op.create_index(
        "idx_comments_generation_level", "comments", ["generation_level"]
    )
    op.create_index(
        "idx_comments_cultural_tags",
        "comments",
        ["cultural_tags"],
        postgresql_using="gin",
    )

    # ========================================================================
    # COMMENT_LIKES table
    # ========================================================================
    op.create_table(
        "comment_likes",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("comment_id", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_like"),
    )

    # ========================================================================
    # REACTIONS table
    # ========================================================================
    op.create_table(
        "reactions",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("content_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("reaction_type", sa.String(20), nullable=False),
        sa.Column("intensity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("family_id", sa.UUID(), nullable=True),
        sa.Column("generation_level", sa.Integer(), nullable=True),
        sa.Column("family_context", postgresql.JSONB(), nullable=True),
        sa.Column("relationship_context", postgresql.JSONB(), nullable=True),
        sa.Column("cultural_context", sa.String(100), nullable=True),
        sa.Column("emotional_context", postgresql.JSONB(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "metadata",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("content_id", "user_id", name="uq_reaction_content_user"),
        sa.CheckConstraint("intensity BETWEEN 1 AND 5", name="ck_reactions_intensity"),
    )

    op.create_index("idx_reactions_content_id", "reactions", ["content_id"])
    op.create_index("idx_reactions_user_id", "reactions", ["user_id"])
    op.create_index(
        "idx_reactions_generation_level", "reactions", ["generation_level"]
    )
    op.create_index(
        "idx_reactions_cultural_context", "reactions", ["cultural_context"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("reactions")
    op.drop_table("comment_likes")
    op.drop_table("comments")
