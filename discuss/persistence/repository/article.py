"""PostgreSQL implementation of Article repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import InternalError
from discuss.domain.model import Article
from discuss.domain.repository import ArticleRepository
from discuss.domain.value import ArticleId
from discuss.persistence.mappers import row_to_article
from discuss.persistence.tables import articles_table


class PostgresArticleRepository(ArticleRepository):
    """PostgreSQL implementation of ArticleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        stmt = select(articles_table).where(articles_table.c.id == article_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Article lookup failed", article_id=str(article_id), error=str(e))
            raise InternalError("Failed to load article") from e
        row = result.fetchone()
        return row_to_article(row._asdict()) if row else None
