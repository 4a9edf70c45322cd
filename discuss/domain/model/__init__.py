"""Domain model entities for discussions."""

from discuss.domain.model.article import Article
from discuss.domain.model.comment import Comment
from discuss.domain.model.thread import (
    RenderedBody,
    ThreadNode,
    ThreadPage,
    TombstoneBody,
    VisibleBody,
)
from discuss.domain.model.user import User

__all__ = [
    "Article",
    "Comment",
    "RenderedBody",
    "ThreadNode",
    "ThreadPage",
    "TombstoneBody",
    "User",
    "VisibleBody",
]
