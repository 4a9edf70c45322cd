"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import Article, Comment, User
from discuss.domain.value import (
    ArticleId,
    CommentId,
    CommentStatus,
    PublicationStatus,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        full_name=row.get("full_name"),
        avatar_url=row.get("avatar_url"),
        role=UserRole(row["role"]),
    )


def row_to_article(row: Dict[str, Any]) -> Article:
    """Convert database row to Article domain model.

    Args:
        row: Database row as dict

    Returns:
        Article domain model
    """
    return Article(
        id=ArticleId(_uuid(row["id"])),
        title=row["title"],
        status=PublicationStatus(row["status"]),
        deleted_at=row.get("deleted_at"),
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        article_id=ArticleId(_uuid(row["article_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        body=row["body"],
        status=CommentStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    return data
