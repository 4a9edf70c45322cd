"""Comment entity.

Comments are threaded replies on articles. A comment points at most at one
parent comment on the same article; the parent is fixed at creation, so the
reply graph can never contain a cycle.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import ArticleId, CommentId, CommentStatus, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on an article or a reply to another
    comment. Comments are soft-deleted: deleted_at is set exactly once and
    the row is immutable afterwards.
    """

    id: CommentId
    article_id: ArticleId
    author_id: UserId
    parent_id: Optional[CommentId] = None
    body: str  # Trimmed and length-checked by CommentService
    status: CommentStatus = CommentStatus.PUBLISHED
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been soft-deleted."""
        return self.deleted_at is not None

    @property
    def is_root(self) -> bool:
        """Whether the comment is a top-level comment."""
        return self.parent_id is None
