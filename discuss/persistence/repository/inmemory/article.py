"""In-memory article repository for testing."""

from typing import Optional

from discuss.domain.model.article import Article
from discuss.domain.repository.article import ArticleRepository
from discuss.domain.value import ArticleId

from .store import InMemoryStore


class InMemoryArticleRepository(ArticleRepository):
    """In-memory implementation of ArticleRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        return self._store.articles.get(article_id)
