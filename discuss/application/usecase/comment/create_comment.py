"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import CommentService, UserService
from discuss.domain.value import ArticleId, CommentId, UserId

from .common import CommentItem, CommentPermissions, comment_item


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    article_id: UUID
    user_id: UUID | None  # Authenticated user, None if anonymous
    content: str
    parent_comment_id: UUID | None = None  # Parent comment ID for replies
    comment_id: UUID | None = None  # Client-chosen ID for retry detection


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem


class CreateCommentUseCase:
    """Use case for creating a comment on an article or replying to another comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User service for viewer and author lookups
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment with author details

        Raises:
            UnauthenticatedError: If no user is signed in
            ValidationError: If the content is empty or too long
            NotFoundError: If the article or parent comment does not exist
            NotPublishedError: If the article is not published
            InvalidParentError: If the parent is deleted or on another article
            AlreadyExistsError: If comment_id was already used
        """
        viewer = await self.user_service.resolve_viewer(
            UserId(request.user_id) if request.user_id else None
        )

        comment = await self.comment_service.create_comment(
            article_id=ArticleId(request.article_id),
            viewer=viewer,
            body=request.content,
            parent_id=(
                CommentId(request.parent_comment_id)
                if request.parent_comment_id
                else None
            ),
            comment_id=CommentId(request.comment_id) if request.comment_id else None,
        )

        authors = await self.user_service.get_authors([comment.author_id])
        permissions = CommentPermissions(
            can_edit=self.comment_service.can_edit(comment, viewer),
            can_delete=self.comment_service.can_delete(comment, viewer),
            can_reply=True,
        )
        return CreateCommentResponse(
            comment=comment_item(comment, authors.get(comment.author_id), permissions)
        )
