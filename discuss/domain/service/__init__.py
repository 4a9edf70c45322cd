"""Domain services."""

from .article_service import ArticleService
from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .thread_service import ThreadService
from .user_service import UserService
from .visibility import VisibilityFilter

__all__ = [
    "ArticleService",
    "CommentService",
    "JWTService",
    "Service",
    "ThreadService",
    "UserService",
    "VisibilityFilter",
]
