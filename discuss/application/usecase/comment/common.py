"""Response items shared by the comment use cases."""

from datetime import datetime
from typing import Any, Callable

from pydantic import BaseModel

from discuss.domain.model import Comment, RenderedBody, ThreadNode, TombstoneBody, User, VisibleBody
from discuss.domain.value import CommentStatus, UserId


class CommentAuthor(BaseModel):
    """Author display fields."""

    user_id: str
    username: str
    full_name: str | None = None
    avatar_url: str | None = None


class CommentPermissions(BaseModel):
    """What the requesting viewer may do with a comment."""

    can_edit: bool = False
    can_delete: bool = False
    can_reply: bool = False


class CommentItem(BaseModel):
    """A single comment as returned by write endpoints."""

    comment_id: str
    article_id: str
    parent_id: str | None
    author: CommentAuthor | None  # None for tombstones and unknown authors
    body: RenderedBody
    status: CommentStatus
    created_at: datetime
    updated_at: datetime
    permissions: CommentPermissions


class CommentNodeItem(CommentItem):
    """A comment placed in a reply tree, with its nested replies."""

    depth: int
    reply_count: int
    replies: list["CommentNodeItem"] = []


def author_item(user: User | None) -> CommentAuthor | None:
    if user is None:
        return None
    return CommentAuthor(
        user_id=str(user.id),
        username=user.username,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
    )


def render_body(comment: Comment) -> VisibleBody | TombstoneBody:
    if comment.is_deleted:
        return TombstoneBody()
    return VisibleBody(text=comment.body)


def _item_fields(
    comment: Comment, author: User | None, permissions: CommentPermissions
) -> dict[str, Any]:
    return {
        "comment_id": str(comment.id),
        "article_id": str(comment.article_id),
        "parent_id": str(comment.parent_id) if comment.parent_id else None,
        "author": None if comment.is_deleted else author_item(author),
        "body": render_body(comment),
        "status": comment.status,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "permissions": permissions,
    }


def comment_item(
    comment: Comment, author: User | None, permissions: CommentPermissions
) -> CommentItem:
    """Build the response item for a single comment."""
    return CommentItem(**_item_fields(comment, author, permissions))


def tree_items(
    roots: list[ThreadNode],
    authors: dict[UserId, User],
    permissions: Callable[[ThreadNode], CommentPermissions],
    max_depth: int,
) -> list[CommentNodeItem]:
    """Convert thread nodes into nested response items.

    Nesting stops at max_depth: everything below a node at that depth is
    listed in pre-order among that node's replies. Each item keeps its true
    depth and its count of direct replies, so clients can still tell how
    the flattened part of a thread hangs together.

    Args:
        roots: Root nodes of the page
        authors: Author lookup by user ID
        permissions: Per-node permission calculator for the viewer
        max_depth: Deepest level that still nests its replies

    Returns:
        One item per root, in root order
    """
    items: list[CommentNodeItem] = []
    # Each entry pairs a node with the list its item is appended to
    stack: list[tuple[ThreadNode, list[CommentNodeItem]]] = [
        (root, items) for root in reversed(roots)
    ]
    while stack:
        node, siblings = stack.pop()
        comment = node.comment
        item = CommentNodeItem(
            **_item_fields(comment, authors.get(comment.author_id), permissions(node)),
            depth=node.depth,
            reply_count=len(node.children),
            replies=[],
        )
        siblings.append(item)

        replies = item.replies if node.depth <= max_depth else siblings
        stack.extend((child, replies) for child in reversed(node.children))
    return items
