"""Article lookup interface.

Articles belong to the publishing workflow; the comment subsystem only reads
them to check existence and publication state.
"""

from abc import ABC, abstractmethod
from typing import Optional

from discuss.domain.model.article import Article
from discuss.domain.value import ArticleId


class ArticleRepository(ABC):
    """Read-only access to articles."""

    @abstractmethod
    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID.

        Args:
            article_id: The article's unique identifier

        Returns:
            The article if found, None otherwise
        """
        pass
