"""Strongly typed identifiers for the discussion domain.

Using NewType keeps comment, article and user ids from being mixed up
while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

CommentId = NewType("CommentId", UUID)
ArticleId = NewType("ArticleId", UUID)
UserId = NewType("UserId", UUID)
