"""Get comments use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer

from discuss.config import CommentSettings
from discuss.domain.model import ThreadNode
from discuss.domain.service import CommentService, ThreadService, UserService
from discuss.domain.service.thread_builder import iter_subtree
from discuss.domain.value import ArticleId, SortOrder, UserId, Viewer

from .common import CommentNodeItem, CommentPermissions, tree_items


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    article_id: UUID
    user_id: UUID | None = None  # None for anonymous readers
    sort: SortOrder = SortOrder.NEWEST
    limit: int | None = None  # Defaults to the configured page size
    offset: int = 0


class GetCommentsResponse(BaseModel):
    """One page of root threads.

    next_offset is left out of the serialized body unless more roots remain.
    """

    comments: list[CommentNodeItem]
    total_count: int
    has_more: bool
    next_offset: int | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_offset(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        data = handler(self)
        if data.get("next_offset") is None:
            data.pop("next_offset", None)
        return data


class GetCommentsUseCase:
    """Use case for reading the reply tree of an article, one page of roots at a time."""

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize get comments use case.

        Args:
            thread_service: Thread read service
            comment_service: Comment service for permission checks
            user_service: User service for viewer and author lookups
            comment_settings: Display depth cap
        """
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.user_service = user_service
        self.max_display_depth = comment_settings.max_display_depth

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request

        Returns:
            Nested comments with author details and per-viewer permissions

        Raises:
            NotFoundError: If the article does not exist
            NotPublishedError: If the article is not published
            ValidationError: If limit or offset are out of range
        """
        viewer = await self.user_service.resolve_viewer(
            UserId(request.user_id) if request.user_id else None
        )

        page = await self.thread_service.get_page(
            ArticleId(request.article_id),
            viewer,
            sort=request.sort,
            limit=request.limit,
            offset=request.offset,
        )

        author_ids = {
            node.comment.author_id
            for root in page.roots
            for node in iter_subtree(root)
            if not node.is_tombstone
        }
        authors = await self.user_service.get_authors(author_ids)

        return GetCommentsResponse(
            comments=tree_items(
                page.roots,
                authors,
                lambda node: self._permissions(node, viewer),
                max_depth=self.max_display_depth,
            ),
            total_count=page.total_count,
            has_more=page.has_more,
            next_offset=page.next_offset,
        )

    def _permissions(self, node: ThreadNode, viewer: Viewer) -> CommentPermissions:
        comment = node.comment
        return CommentPermissions(
            can_edit=self.comment_service.can_edit(comment, viewer),
            can_delete=self.comment_service.can_delete(comment, viewer),
            can_reply=(
                viewer.is_authenticated
                and not node.is_tombstone
                and node.depth < self.max_display_depth
            ),
        )
