"""Client for consumers of the comments API."""

from .api import CommentsAPIClient, CommentsAPIError
from .thread import CommentThread

__all__ = ["CommentThread", "CommentsAPIClient", "CommentsAPIError"]
