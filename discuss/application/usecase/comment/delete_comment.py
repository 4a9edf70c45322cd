"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.domain.service import CommentService, UserService
from discuss.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: UUID
    user_id: UUID | None


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Replies to the deleted comment stay in place; readers see the
        deleted comment as a tombstone.

        Args:
            request: Delete comment request

        Raises:
            UnauthenticatedError: If no user is signed in
            NotFoundError: If the comment is missing or already deleted
            NotAuthorizedError: If the user is neither author nor elevated
        """
        viewer = await self.user_service.resolve_viewer(
            UserId(request.user_id) if request.user_id else None
        )
        await self.comment_service.delete_comment(CommentId(request.comment_id), viewer)
