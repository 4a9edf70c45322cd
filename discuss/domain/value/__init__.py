"""Domain value objects for discussions."""

from discuss.domain.value.identifiers import ArticleId, CommentId, UserId
from discuss.domain.value.types import (
    ANONYMOUS,
    CommentStatus,
    PublicationStatus,
    SortOrder,
    UserRole,
    Viewer,
)

__all__ = [
    # Identifiers
    "ArticleId",
    "CommentId",
    "UserId",
    # Types
    "ANONYMOUS",
    "CommentStatus",
    "PublicationStatus",
    "SortOrder",
    "UserRole",
    "Viewer",
]
