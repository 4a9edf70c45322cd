"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import CommentService, UserService
from discuss.domain.value import CommentId, UserId

from .common import CommentItem, CommentPermissions, comment_item


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: UUID
    user_id: UUID | None  # Current user, must be author or elevated
    content: str


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            The updated comment

        Raises:
            UnauthenticatedError: If no user is signed in
            ValidationError: If the content is empty or too long
            NotFoundError: If the comment is missing or deleted
            NotAuthorizedError: If the user is neither author nor elevated
            EditWindowExpiredError: If the author's edit window has closed
        """
        viewer = await self.user_service.resolve_viewer(
            UserId(request.user_id) if request.user_id else None
        )

        comment = await self.comment_service.edit_comment(
            CommentId(request.comment_id), viewer, request.content
        )

        authors = await self.user_service.get_authors([comment.author_id])
        permissions = CommentPermissions(
            can_edit=self.comment_service.can_edit(comment, viewer),
            can_delete=self.comment_service.can_delete(comment, viewer),
            can_reply=True,
        )
        return UpdateCommentResponse(
            comment=comment_item(comment, authors.get(comment.author_id), permissions)
        )
