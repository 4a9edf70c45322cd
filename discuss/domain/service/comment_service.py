"""Comment domain service.

Enforces the mutation policy for comments: who may create, edit and delete,
the edit window, and the parent rules for replies. Every write is a single
row; nothing here coordinates across comments.
"""

from datetime import datetime, timedelta
from typing import Callable
from uuid import uuid4

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import (
    EditWindowExpiredError,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from discuss.domain.model import Comment
from discuss.domain.model.common import utc_now
from discuss.domain.repository import CommentRepository
from discuss.domain.value import (
    ArticleId,
    CommentId,
    CommentStatus,
    UserId,
    Viewer,
)

from .article_service import ArticleService
from .base import Service


class CommentService(Service):
    """Domain service for comment mutations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        article_service: ArticleService,
        comment_settings: CommentSettings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            article_service: Article service for the publication check
            comment_settings: Comment policy settings
            clock: Source of the current time
        """
        self.comment_repository = comment_repository
        self.article_service = article_service
        self.settings = comment_settings
        self.clock = clock

    @property
    def edit_window(self) -> timedelta:
        return timedelta(minutes=self.settings.edit_window_minutes)

    def validate_body(self, body: str) -> str:
        """Trim and length-check a comment body.

        Args:
            body: Raw body text

        Returns:
            Trimmed body

        Raises:
            ValidationError: If the body is empty or too long
        """
        trimmed = body.strip()
        if not trimmed:
            raise ValidationError("Comment content is required")
        if len(trimmed) < self.settings.min_length:
            raise ValidationError(
                f"Comment content is too short (min {self.settings.min_length} characters)"
            )
        if len(trimmed) > self.settings.max_length:
            raise ValidationError(
                f"Comment content is too long (max {self.settings.max_length} characters)"
            )
        return trimmed

    def within_edit_window(self, comment: Comment, now: datetime | None = None) -> bool:
        """Whether the author may still edit the comment."""
        now = now or self.clock()
        return now - comment.created_at < self.edit_window

    def can_edit(self, comment: Comment, viewer: Viewer) -> bool:
        """Whether the viewer may edit the comment right now."""
        if comment.is_deleted or not viewer.is_authenticated:
            return False
        if viewer.elevated:
            return True
        return viewer.owns(comment.author_id) and self.within_edit_window(comment)

    def can_delete(self, comment: Comment, viewer: Viewer) -> bool:
        """Whether the viewer may delete the comment."""
        if comment.is_deleted or not viewer.is_authenticated:
            return False
        return viewer.elevated or viewer.owns(comment.author_id)

    async def create_comment(
        self,
        article_id: ArticleId,
        viewer: Viewer,
        body: str,
        parent_id: CommentId | None = None,
        comment_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on an article or a reply to another comment.

        Args:
            article_id: Article ID
            viewer: Author of the new comment
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)
            comment_id: Client-chosen ID so a retried create is detectable

        Returns:
            The created comment, always published

        Raises:
            UnauthenticatedError: If the viewer is anonymous
            ValidationError: If the body is empty or too long
            NotFoundError: If the article or the parent does not exist
            NotPublishedError: If the article is not published
            InvalidParentError: If the parent is deleted or on another article
            AlreadyExistsError: If comment_id is already taken
        """
        if viewer.user_id is None:
            raise UnauthenticatedError("create comments")
        author_id: UserId = viewer.user_id

        with logfire.span(
            "comment_service.create_comment",
            article_id=str(article_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            text = self.validate_body(body)
            await self.article_service.get_published_article(article_id)

            new_id = comment_id or CommentId(uuid4())
            if parent_id is not None:
                await self._check_parent(parent_id, article_id, new_id)

            now = self.clock()
            comment = Comment(
                id=new_id,
                article_id=article_id,
                author_id=author_id,
                parent_id=parent_id,
                body=text,
                status=CommentStatus.PUBLISHED,
                created_at=now,
                updated_at=now,
                deleted_at=None,
            )

            saved = await self.comment_repository.add(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                article_id=str(article_id),
                author_id=str(author_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def _check_parent(
        self, parent_id: CommentId, article_id: ArticleId, new_id: CommentId
    ) -> None:
        if parent_id == new_id:
            logfire.error("Comment cannot reply to itself", comment_id=str(new_id))
            raise InvalidParentError("Comment cannot reply to itself")

        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None:
            logfire.warn("Parent comment not found", parent_id=str(parent_id))
            raise NotFoundError("Parent comment", str(parent_id))
        if parent.article_id != article_id:
            logfire.error(
                "Parent comment does not belong to article",
                parent_id=str(parent_id),
                parent_article_id=str(parent.article_id),
                target_article_id=str(article_id),
            )
            raise InvalidParentError("Parent comment does not belong to this article")
        if parent.is_deleted:
            logfire.warn("Reply to deleted comment rejected", parent_id=str(parent_id))
            raise InvalidParentError("Cannot reply to a deleted comment")

    async def _get_live_comment(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None or comment.is_deleted:
            logfire.warn("Comment not found or deleted", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def edit_comment(
        self, comment_id: CommentId, viewer: Viewer, body: str
    ) -> Comment:
        """Replace the body of a comment.

        Authors may edit only within the edit window; elevated roles may
        edit any live comment at any time. Concurrent edits are
        last-write-wins.

        Args:
            comment_id: Comment ID
            viewer: Who is editing
            body: New comment text

        Returns:
            The updated comment

        Raises:
            UnauthenticatedError: If the viewer is anonymous
            ValidationError: If the body is empty or too long
            NotFoundError: If the comment is missing or deleted
            NotAuthorizedError: If the viewer is neither author nor elevated
            EditWindowExpiredError: If the author's edit window has closed
        """
        if viewer.user_id is None:
            raise UnauthenticatedError("edit comments")

        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            user_id=str(viewer.user_id),
            elevated=viewer.elevated,
        ):
            text = self.validate_body(body)
            comment = await self._get_live_comment(comment_id)

            if not viewer.elevated:
                if not viewer.owns(comment.author_id):
                    logfire.warn(
                        "Unauthorized comment edit attempt",
                        comment_id=str(comment_id),
                        user_id=str(viewer.user_id),
                    )
                    raise NotAuthorizedError(
                        "edit", "comment", str(comment_id), str(viewer.user_id)
                    )
                now = self.clock()
                if not self.within_edit_window(comment, now):
                    logfire.warn(
                        "Comment edit window expired",
                        comment_id=str(comment_id),
                        age_seconds=(now - comment.created_at).total_seconds(),
                    )
                    raise EditWindowExpiredError(
                        str(comment_id), self.settings.edit_window_minutes
                    )

            updated = await self.comment_repository.update_body(
                comment_id, text, self.clock()
            )
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                article_id=str(updated.article_id),
                body_length=len(updated.body),
                by_moderator=not viewer.owns(comment.author_id),
            )
            return updated

    async def delete_comment(self, comment_id: CommentId, viewer: Viewer) -> Comment:
        """Soft-delete a comment.

        Args:
            comment_id: Comment ID
            viewer: Who is deleting

        Returns:
            The deleted comment

        Raises:
            UnauthenticatedError: If the viewer is anonymous
            NotFoundError: If the comment is missing or already deleted
            NotAuthorizedError: If the viewer is neither author nor elevated
        """
        if viewer.user_id is None:
            raise UnauthenticatedError("delete comments")

        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(viewer.user_id),
            elevated=viewer.elevated,
        ):
            comment = await self._get_live_comment(comment_id)

            if not (viewer.elevated or viewer.owns(comment.author_id)):
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(viewer.user_id),
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), str(viewer.user_id)
                )

            deleted = await self.comment_repository.soft_delete(
                comment_id, self.clock()
            )
            if deleted is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                article_id=str(deleted.article_id),
                by_moderator=not viewer.owns(comment.author_id),
            )
            return deleted
