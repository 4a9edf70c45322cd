"""SQLAlchemy table definitions for the discussion service.

These definitions are used with SQLAlchemy Core and match the schema created
by the Alembic migrations. users and articles are owned by other services;
only the columns the comment subsystem reads are declared here.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (read-only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(255), nullable=False, unique=True),
    Column("full_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("role", String(50), nullable=False, server_default="reader"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# ARTICLES TABLE (read-only here)
# ============================================================================
articles_table = Table(
    "articles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(500), nullable=False),
    Column("status", String(50), nullable=False, server_default="draft"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_articles_status", articles_table.c.status)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "article_id",
        UUID,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    # No cascade: parents are soft-deleted and must keep anchoring replies
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column("body", Text, nullable=False),
    Column("status", String(20), nullable=False, server_default="published"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "char_length(body) BETWEEN 1 AND 5000", name="comment_body_length"
    ),
    CheckConstraint(
        "status IN ('published', 'pending', 'deleted')", name="comment_status_valid"
    ),
    CheckConstraint("parent_id IS NULL OR parent_id <> id", name="comment_not_self_parent"),
)

Index(
    "idx_comments_article_created",
    comments_table.c.article_id,
    comments_table.c.created_at,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
