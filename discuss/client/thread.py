"""Client-side controller for one article's comment thread.

Keeps the loaded pages of root threads, advances pagination and wraps the
write calls. After every successful write the first page is fetched again
instead of splicing the change into the cached tree: only the server can
place a comment correctly among its siblings and page boundaries.
"""

from uuid import UUID, uuid4

import logfire

from discuss.application.usecase.comment import CommentItem, CommentNodeItem
from discuss.domain.value import SortOrder

from .api import CommentsAPIClient, CommentsAPIError


class CommentThread:
    """Stateful view of the comments on one article.

    Every operation clears error when it starts. A failed operation puts the
    server's message in error and leaves the rest of the state as it was.
    Read failures are recorded only; write failures are also re-raised.

    A fetch that is overtaken by a newer one (for example a sort change
    while a page is loading) is dropped when it completes.
    """

    def __init__(
        self,
        api: CommentsAPIClient,
        article_id: UUID | str,
        sort: SortOrder = SortOrder.NEWEST,
        page_size: int = 50,
    ) -> None:
        self.api = api
        self.article_id = article_id
        self.page_size = page_size

        self.comments: list[CommentNodeItem] = []
        self.total_count = 0
        self.has_more = False
        self.sort = sort
        self.offset = 0
        self.is_loading = False
        self.error: str | None = None

        self._generation = 0

    async def load(self) -> None:
        """Fetch the first page, replacing whatever is loaded."""
        self._generation += 1
        await self._fetch(self._generation, offset=0, append=False)

    async def refresh(self) -> None:
        """Same as load; kept for call sites that re-read after a change."""
        await self.load()

    async def load_more(self) -> None:
        """Append the next page of root threads, if there is one."""
        if not self.has_more or self.is_loading:
            return
        await self._fetch(self._generation, offset=self.offset, append=True)

    async def set_sort(self, sort: SortOrder) -> None:
        """Switch root ordering and start again from the first page."""
        self.sort = sort
        self.comments = []
        self.total_count = 0
        self.has_more = False
        self.offset = 0
        await self.load()

    async def _fetch(self, generation: int, offset: int, append: bool) -> None:
        self.is_loading = True
        self.error = None
        try:
            page = await self.api.get_comments(
                self.article_id, sort=self.sort, limit=self.page_size, offset=offset
            )
        except CommentsAPIError as e:
            if generation == self._generation:
                self.error = e.message
                self.is_loading = False
            return

        if generation != self._generation:
            logfire.debug(
                "Discarding superseded comments page",
                article_id=str(self.article_id),
                offset=offset,
            )
            return

        self.comments = self.comments + page.comments if append else page.comments
        self.total_count = page.total_count
        self.has_more = page.has_more
        self.offset = offset + len(page.comments)
        self.is_loading = False

    async def add_comment(
        self,
        content: str,
        parent_id: UUID | str | None = None,
        comment_id: UUID | str | None = None,
    ) -> CommentItem | None:
        """Post a comment or reply, then reload the first page.

        A client-side id is always sent. If the server reports that id as
        already taken, an earlier attempt committed and the call counts as a
        success.

        Args:
            content: Comment text
            parent_id: Comment being replied to, None for a top-level comment
            comment_id: Id to reuse when retrying an earlier attempt

        Returns:
            The created comment, or None when an earlier attempt had created it

        Raises:
            CommentsAPIError: If the server rejected the comment
        """
        self.error = None
        comment_id = comment_id or uuid4()
        created: CommentItem | None = None
        try:
            created = await self.api.create_comment(
                self.article_id,
                content,
                parent_comment_id=parent_id,
                comment_id=comment_id,
            )
        except CommentsAPIError as e:
            if e.code != "already_exists":
                self.error = e.message
                raise
            logfire.info("Comment create already committed", comment_id=str(comment_id))

        await self.refresh()
        return created

    async def edit_comment(self, comment_id: UUID | str, content: str) -> CommentItem:
        """Edit a comment, then reload the first page.

        Raises:
            CommentsAPIError: If the server rejected the edit
        """
        self.error = None
        try:
            updated = await self.api.update_comment(comment_id, content)
        except CommentsAPIError as e:
            self.error = e.message
            raise
        await self.refresh()
        return updated

    async def remove_comment(self, comment_id: UUID | str) -> None:
        """Delete a comment, then reload the first page.

        Raises:
            CommentsAPIError: If the server rejected the delete
        """
        self.error = None
        try:
            await self.api.delete_comment(comment_id)
        except CommentsAPIError as e:
            self.error = e.message
            raise
        await self.refresh()
