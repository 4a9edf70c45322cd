"""Thread read service.

Runs the read pipeline for one article: visibility filter, tree builder,
root sort and root pagination. Only the visibility step touches the store;
the rest works on the already-fetched list.
"""

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import ValidationError
from discuss.domain.model import ThreadPage
from discuss.domain.value import ArticleId, SortOrder, Viewer

from .base import Service
from .thread_builder import build_thread, paginate_roots, sort_comments, sort_roots
from .visibility import VisibilityFilter


class ThreadService(Service):
    """Domain service producing paginated reply trees."""

    def __init__(
        self, visibility_filter: VisibilityFilter, comment_settings: CommentSettings
    ) -> None:
        """Initialize thread service.

        Args:
            visibility_filter: Visibility filter for the viewer
            comment_settings: Pagination limits
        """
        self.visibility_filter = visibility_filter
        self.settings = comment_settings

    async def get_page(
        self,
        article_id: ArticleId,
        viewer: Viewer,
        sort: SortOrder = SortOrder.NEWEST,
        limit: int | None = None,
        offset: int = 0,
    ) -> ThreadPage:
        """Get one page of root threads with complete subtrees.

        Args:
            article_id: Article ID
            viewer: Who is reading
            sort: Root ordering (newest or oldest first)
            limit: Roots per page; defaults to the configured page size
            offset: Roots to skip

        Returns:
            Page of root ThreadNodes plus pagination metadata

        Raises:
            ValidationError: If limit or offset are out of range
            NotFoundError: If the article does not exist
            NotPublishedError: If the article is not published
        """
        if limit is None:
            limit = self.settings.default_page_size
        if limit < 1 or limit > self.settings.max_page_size:
            raise ValidationError(
                f"limit must be between 1 and {self.settings.max_page_size}"
            )
        if offset < 0:
            raise ValidationError("offset must not be negative")

        with logfire.span(
            "thread_service.get_page",
            article_id=str(article_id),
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            comments = await self.visibility_filter.readable_comments(
                article_id, viewer
            )

            # Siblings keep the order they are fed in, so pre-sort with the
            # same key used for roots
            roots = build_thread(sort_comments(comments, sort))
            page = paginate_roots(sort_roots(roots, sort), limit=limit, offset=offset)

            logfire.info(
                "Thread page built",
                article_id=str(article_id),
                comments=len(comments),
                total_roots=page.total_count,
                page_roots=len(page.roots),
                has_more=page.has_more,
            )
            return page
