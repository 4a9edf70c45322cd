"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from discuss.domain.error import AlreadyExistsError
from discuss.domain.model.comment import Comment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import ArticleId, CommentId, CommentStatus

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _comments(self) -> dict[CommentId, Comment]:
        return self._store.comments

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_article(
        self,
        article_id: ArticleId,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find all comments on an article, oldest first."""
        comments = [c for c in self._comments.values() if c.article_id == article_id]

        if not include_deleted:
            comments = [c for c in comments if c.deleted_at is None]

        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        if comment.id in self._comments:
            raise AlreadyExistsError("Comment", str(comment.id))
        self._comments[comment.id] = comment
        return comment

    async def update_body(
        self, comment_id: CommentId, body: str, updated_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of a live comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        updated = comment.model_copy(update={"body": body, "updated_at": updated_at})
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None

        deleted = comment.model_copy(
            update={
                "status": CommentStatus.DELETED,
                "deleted_at": deleted_at,
                "updated_at": deleted_at,
            }
        )
        self._comments[comment_id] = deleted
        return deleted
