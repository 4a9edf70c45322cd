"""Article domain service."""

import logfire

from discuss.domain.error import NotFoundError, NotPublishedError
from discuss.domain.model import Article
from discuss.domain.repository import ArticleRepository
from discuss.domain.value import ArticleId

from .base import Service


class ArticleService(Service):
    """Publication checks against the article collaborator."""

    def __init__(self, article_repository: ArticleRepository) -> None:
        """Initialize article service.

        Args:
            article_repository: Article repository
        """
        self.article_repository = article_repository

    async def get_published_article(self, article_id: ArticleId) -> Article:
        """Get an article that is open for discussion.

        Args:
            article_id: Article ID

        Returns:
            The published article

        Raises:
            NotFoundError: If the article does not exist
            NotPublishedError: If the article is not publicly visible
        """
        with logfire.span(
            "article_service.get_published_article", article_id=str(article_id)
        ):
            article = await self.article_repository.find_by_id(article_id)
            if article is None:
                logfire.warn("Article not found", article_id=str(article_id))
                raise NotFoundError("Article", str(article_id))
            if not article.is_published:
                logfire.warn(
                    "Article not published",
                    article_id=str(article_id),
                    status=article.status.value,
                )
                raise NotPublishedError(str(article_id))
            return article
