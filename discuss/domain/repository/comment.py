"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from discuss.domain.model.comment import Comment
from discuss.domain.value import ArticleId, CommentId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted ones.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_article(
        self,
        article_id: ArticleId,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find all comments on an article.

        Comments are returned ordered by created_at, then id, so callers
        always see the same order for the same data.

        Args:
            article_id: The article ID
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment

        Raises:
            AlreadyExistsError: If a comment with the same id exists
        """
        pass

    @abstractmethod
    async def update_body(
        self, comment_id: CommentId, body: str, updated_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of a live comment.

        Args:
            comment_id: The comment ID
            body: New body text
            updated_at: Edit timestamp

        Returns:
            The updated comment, or None if missing or already deleted
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted.

        Args:
            comment_id: The comment ID
            deleted_at: Deletion timestamp

        Returns:
            The deleted comment, or None if missing or already deleted
        """
        pass
