"""Visibility filter for comment reads.

Decides which stored comments a viewer may see before the reply tree is
built. Deleted comments are never eligible; a deleted comment only comes
back as a tombstone when a visible reply still needs it as an anchor.
"""

from typing import Sequence

import logfire

from discuss.domain.model import Comment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import ArticleId, CommentId, CommentStatus, Viewer

from .article_service import ArticleService
from .base import Service


def is_eligible(comment: Comment, viewer: Viewer) -> bool:
    """Whether a comment may be shown to the viewer with its body.

    Elevated viewers see every live comment. Everyone else sees published
    comments plus their own, whatever their status.
    """
    if comment.is_deleted:
        return False
    if viewer.elevated:
        return True
    return comment.status == CommentStatus.PUBLISHED or viewer.owns(comment.author_id)


def admit_tombstones(
    stored: Sequence[Comment], eligible: Sequence[Comment]
) -> list[Comment]:
    """Add deleted ancestors of eligible comments back as tombstone anchors.

    Walks up from every eligible comment through consecutive deleted
    parents. The walk stops at the first parent that is missing, live or
    already admitted.

    Args:
        stored: Every comment on the article, deleted ones included
        eligible: The subset the viewer may read

    Returns:
        Eligible comments plus anchoring tombstones, in stored order
    """
    by_id: dict[CommentId, Comment] = {c.id: c for c in stored}
    keep: set[CommentId] = {c.id for c in eligible}

    for comment in eligible:
        parent_id = comment.parent_id
        while parent_id is not None and parent_id not in keep:
            parent = by_id.get(parent_id)
            if parent is None or not parent.is_deleted:
                break
            keep.add(parent.id)
            parent_id = parent.parent_id

    return [c for c in stored if c.id in keep]


class VisibilityFilter(Service):
    """Query-time visibility rules for one article and one viewer."""

    def __init__(
        self,
        article_service: ArticleService,
        comment_repository: CommentRepository,
    ) -> None:
        """Initialize visibility filter.

        Args:
            article_service: Article service for the publication check
            comment_repository: Comment repository
        """
        self.article_service = article_service
        self.comment_repository = comment_repository

    async def readable_comments(
        self, article_id: ArticleId, viewer: Viewer
    ) -> list[Comment]:
        """Comments the viewer may see on an article, plus tombstone anchors.

        Args:
            article_id: Article ID
            viewer: Who is reading

        Returns:
            Flat list of readable comments in store order

        Raises:
            NotFoundError: If the article does not exist
            NotPublishedError: If the article is not published
        """
        with logfire.span(
            "visibility_filter.readable_comments",
            article_id=str(article_id),
            authenticated=viewer.is_authenticated,
            elevated=viewer.elevated,
        ):
            await self.article_service.get_published_article(article_id)

            stored = await self.comment_repository.find_by_article(
                article_id, include_deleted=True
            )
            eligible = [c for c in stored if is_eligible(c, viewer)]
            readable = admit_tombstones(stored, eligible)

            logfire.info(
                "Comments filtered for viewer",
                article_id=str(article_id),
                stored=len(stored),
                eligible=len(eligible),
                tombstones=len(readable) - len(eligible),
            )
            return readable
