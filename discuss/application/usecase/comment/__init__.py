"""Comment use cases."""

from .common import CommentAuthor, CommentItem, CommentNodeItem, CommentPermissions
from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .update_comment import (
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentAuthor",
    "CommentItem",
    "CommentNodeItem",
    "CommentPermissions",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "UpdateCommentRequest",
    "UpdateCommentResponse",
    "UpdateCommentUseCase",
]
