"""SQLAlchemy table definitions for the interaction service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("content_id", UUID(as_uuid=True), nullable=False),
    Column("author_id", UUID(as_uuid=True), nullable=False),
    Column("text", Text, nullable=False),
    Column(
        "parent_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("mentions", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"),
    Column("hashtags", ARRAY(String(100)), nullable=False, server_default="{}"),
    Column("media_urls", ARRAY(Text), nullable=False, server_default="{}"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edit_count", Integer, nullable=False, server_default="0"),
    Column("edit_history", JSONB, nullable=False, server_default="[]"),
    Column("status", String(20), nullable=False, server_default="ACTIVE"),
    Column("moderation_status", String(20), nullable=False, server_default="PENDING"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("family_id", UUID(as_uuid=True), nullable=True),
    Column("generation_level", Integer, nullable=True),
    Column("family_context", JSONB, nullable=True),
    Column("relationship_context", JSONB, nullable=True),
    Column("cultural_tags", ARRAY(String(100)), nullable=False, server_default="{}"),
    Column("sentiment_score", Float, nullable=True),
    Column("language_code", String(5), nullable=True),
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column("is_private", Boolean, nullable=False, server_default="false"),
    Column("metadata", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reply_count >= 0", name="ck_comments_reply_count"),
    CheckConstraint("like_count >= 0", name="ck_comments_like_count"),
    CheckConstraint("edit_count >= 0", name="ck_comments_edit_count"),
    CheckConstraint(
        "(parent_id IS NULL) = (depth = 0)", name="ck_comments_parent_depth"
    ),
)

Index(
    "idx_comments_parent_id_created_at",
    comments_table.c.parent_id,
    comments_table.c.created_at,
)
Index(
    "idx_comments_content_id_created_at",
    comments_table.c.content_id,
    comments_table.c.created_at,
)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_moderation_status", comments_table.c.moderation_status)
Index("idx_comments_generation_level", comments_table.c.generation_level)
Index(
    "idx_comments_cultural_tags",
    comments_table.c.cultural_tags,
    postgresql_using="gin",
)

# ============================================================================
# COMMENT LIKES TABLE
# ============================================================================
comment_likes_table = Table(
    "comment_likes",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column(
        "comment_id",
        BigInteger,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID(as_uuid=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("comment_id", "user_id", name="uq_comment_like"),
)

# ============================================================================
# REACTIONS TABLE
# ============================================================================
reactions_table = Table(
    "reactions",
    metadata,
    Column("id", BigInteger, Identity(), primary_key=True),
    Column("content_id", UUID(as_uuid=True), nullable=False),
    Column("user_id", UUID(as_uuid=True), nullable=False),
    Column("reaction_type", String(20), nullable=False),
    Column("intensity", Integer, nullable=False, server_default="1"),
    Column("family_id", UUID(as_uuid=True), nullable=True),
    Column("generation_level", Integer, nullable=True),
    Column("family_context", JSONB, nullable=True),
    Column("relationship_context", JSONB, nullable=True),
    Column("cultural_context", String(100), nullable=True),
    Column("emotional_context", JSONB, nullable=True),
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column("is_private", Boolean, nullable=False, server_default="false"),
    Column("metadata", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("content_id", "user_id", name="uq_reaction_content_user"),
    CheckConstraint("intensity BETWEEN 1 AND 5", name="ck_reactions_intensity"),
)

Index("idx_reactions_content_id", reactions_table.c.content_id)
Index("idx_reactions_user_id", reactions_table.c.user_id)
Index("idx_reactions_generation_level", reactions_table.c.generation_level)
Index("idx_reactions_cultural_context", reactions_table.c.cultural_context)
