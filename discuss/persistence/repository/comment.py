"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import AlreadyExistsError, InternalError
from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import ArticleId, CommentId, CommentStatus
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Store failures surface as InternalError; callers never see
    SQLAlchemy exceptions.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted ones."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("Comment lookup failed", comment_id=str(comment_id), error=str(e))
            raise InternalError("Failed to load comment") from e
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_article(
        self,
        article_id: ArticleId,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find all comments on an article, oldest first."""
        stmt = select(comments_table).where(comments_table.c.article_id == article_id)

        if not include_deleted:
            stmt = stmt.where(comments_table.c.deleted_at.is_(None))

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error(
                "Comment listing failed", article_id=str(article_id), error=str(e)
            )
            raise InternalError("Failed to load comments") from e
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        try:
            # Savepoint so a duplicate id leaves the request transaction usable
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
        except IntegrityError as e:
            existing = await self.find_by_id(comment.id)
            if existing is not None:
                raise AlreadyExistsError("Comment", str(comment.id)) from e
            logfire.error("Comment insert rejected", comment_id=str(comment.id), error=str(e))
            raise InternalError("Failed to save comment") from e
        except SQLAlchemyError as e:
            logfire.error("Comment insert failed", comment_id=str(comment.id), error=str(e))
            raise InternalError("Failed to save comment") from e

        return row_to_comment(result.fetchone()._asdict())

    async def update_body(
        self, comment_id: CommentId, body: str, updated_at: datetime
    ) -> Optional[Comment]:
        """Replace the body of a live comment.

        The deleted_at guard lives in the UPDATE itself, so a delete that
        lands between the policy check and this write wins.
        """
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(body=body, updated_at=updated_at)
            .returning(comments_table)
        )
        return await self._update_one(stmt, comment_id, "edit")

    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Mark a live comment as deleted."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(
                status=CommentStatus.DELETED.value,
                deleted_at=deleted_at,
                updated_at=deleted_at,
            )
            .returning(comments_table)
        )
        return await self._update_one(stmt, comment_id, "delete")

    async def _update_one(self, stmt, comment_id: CommentId, action: str) -> Optional[Comment]:
        try:
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error(
                "Comment update failed",
                comment_id=str(comment_id),
                action=action,
                error=str(e),
            )
            raise InternalError(f"Failed to {action} comment") from e

        if row is None:
            # Comment not found or deleted
            return None
        return row_to_comment(row._asdict())
