"""In-memory repository implementations for testing."""

from .article import InMemoryArticleRepository
from .comment import InMemoryCommentRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryArticleRepository",
    "InMemoryCommentRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
