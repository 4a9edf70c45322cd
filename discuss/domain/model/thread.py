"""Read-side thread structures.

ThreadNode and ThreadPage exist only for the duration of a read; they are
never persisted. A node's body is rendered as a tagged variant so every
consumer has to handle tombstones explicitly.
"""

from dataclasses import dataclass, field
from typing import Annotated, Literal, Union

from pydantic import Field

from discuss.domain.model.comment import Comment
from discuss.domain.model.common import DomainModel


class VisibleBody(DomainModel):
    """Body of a comment the viewer may read."""

    kind: Literal["visible"] = "visible"
    text: str


class TombstoneBody(DomainModel):
    """Placeholder for a deleted comment kept to anchor its replies."""

    kind: Literal["tombstone"] = "tombstone"


RenderedBody = Annotated[Union[VisibleBody, TombstoneBody], Field(discriminator="kind")]


@dataclass(eq=False)
class ThreadNode:
    """A comment placed in the reply tree.

    depth is 0 for roots; children keep the order in which comments were
    handed to the tree builder.
    """

    comment: Comment
    depth: int = 0
    children: list["ThreadNode"] = field(default_factory=list)

    @property
    def body(self) -> VisibleBody | TombstoneBody:
        if self.comment.is_deleted:
            return TombstoneBody()
        return VisibleBody(text=self.comment.body)

    @property
    def is_tombstone(self) -> bool:
        return self.comment.is_deleted


@dataclass
class ThreadPage:
    """One page of root threads, each carrying its complete subtree."""

    roots: list[ThreadNode]
    total_count: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total_count

    @property
    def next_offset(self) -> int | None:
        return self.offset + self.limit if self.has_more else None
