"""Reply tree construction, root ordering and root pagination.

Everything here is a pure, synchronous transformation over comments that
have already been fetched. Nothing in this module performs I/O or raises on
malformed reply data: anomalies are absorbed structurally.

The tree is linked with an id-keyed map and walked with explicit stacks, so
an arbitrarily deep reply chain cannot exhaust the interpreter stack.
"""

from typing import Iterable, Sequence

from discuss.domain.model import Comment, ThreadNode, ThreadPage
from discuss.domain.value import CommentId, SortOrder


def sort_comments(comments: Iterable[Comment], order: SortOrder) -> list[Comment]:
    """Order comments by created_at in the requested direction.

    Ties on created_at are always broken by id ascending, in both directions,
    so repeated requests over the same data yield the same order.
    """
    # Two stable passes: id ascending first, then created_at. Python keeps
    # equal keys in their prior order even with reverse=True.
    ordered = sorted(comments, key=lambda c: c.id)
    ordered.sort(key=lambda c: c.created_at, reverse=order == SortOrder.NEWEST)
    return ordered


def sort_roots(roots: Iterable[ThreadNode], order: SortOrder) -> list[ThreadNode]:
    """Order root nodes with the same key as sort_comments."""
    ordered = sorted(roots, key=lambda n: n.comment.id)
    ordered.sort(key=lambda n: n.comment.created_at, reverse=order == SortOrder.NEWEST)
    return ordered


def build_thread(comments: Sequence[Comment]) -> list[ThreadNode]:
    """Build the reply tree from a flat, order-agnostic list of comments.

    Algorithm:
    1. Wrap every comment in a ThreadNode keyed by id.
    2. Single pass in input order: comments whose parent resolves (and is
       not the comment itself) are appended to the parent's children;
       everything else becomes a root. Replies whose parent was filtered
       out are therefore promoted instead of dropped.
    3. Assign depths top-down from the roots with an explicit stack.
    4. Nodes still unreached hang off a parent cycle (defective data). For
       each, the cycle is broken by promoting the first comment found on it,
       so no comment is lost.

    Args:
        comments: Eligible comments, in the order siblings should appear

    Returns:
        Root nodes in input order, each with its subtree attached
    """
    nodes: dict[CommentId, ThreadNode] = {}
    for comment in comments:
        nodes[comment.id] = ThreadNode(comment=comment)

    roots: list[ThreadNode] = []
    parents: dict[CommentId, ThreadNode] = {}
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)
            parents[comment.id] = parent

    reached: set[CommentId] = set()
    for root in roots:
        _assign_depths(root, reached)

    if len(reached) < len(nodes):
        for comment in comments:
            if comment.id in reached:
                continue
            node = _cycle_member(nodes[comment.id], parents)
            parents[node.comment.id].children.remove(node)
            node.depth = 0
            roots.append(node)
            _assign_depths(node, reached)

    return roots


def _assign_depths(root: ThreadNode, reached: set[CommentId]) -> None:
    """Set depth on every node below root, marking each as reached."""
    reached.add(root.comment.id)
    stack = [root]
    while stack:
        node = stack.pop()
        for child in node.children:
            if child.comment.id in reached:
                continue
            reached.add(child.comment.id)
            child.depth = node.depth + 1
            stack.append(child)


def _cycle_member(
    node: ThreadNode, parents: dict[CommentId, ThreadNode]
) -> ThreadNode:
    """Climb parent links from an unreached node until a node repeats."""
    seen: set[CommentId] = set()
    while node.comment.id not in seen:
        seen.add(node.comment.id)
        node = parents[node.comment.id]
    return node


def iter_subtree(root: ThreadNode) -> Iterable[ThreadNode]:
    """Yield root and all its descendants in pre-order, without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def paginate_roots(
    roots: Sequence[ThreadNode], limit: int, offset: int
) -> ThreadPage:
    """Slice one page out of an already ordered root list.

    Only roots are counted and sliced; each returned root keeps its complete
    subtree.

    Args:
        roots: Ordered root nodes
        limit: Maximum number of roots on the page (>= 1)
        offset: Number of roots to skip (>= 0)

    Returns:
        The requested page with pagination metadata
    """
    return ThreadPage(
        roots=list(roots[offset : offset + limit]),
        total_count=len(roots),
        offset=offset,
        limit=limit,
    )
