"""PostgreSQL repository implementations."""

from discuss.persistence.repository.article import PostgresArticleRepository
from discuss.persistence.repository.comment import PostgresCommentRepository
from discuss.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresArticleRepository",
    "PostgresCommentRepository",
    "PostgresUserRepository",
]
