"""Domain value objects for discussions.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import UserId


class CommentStatus(str, Enum):
    """Lifecycle status of a comment.

    PENDING is reserved for moderation gating; new comments are always
    created as PUBLISHED.
    """

    PUBLISHED = "published"
    PENDING = "pending"
    DELETED = "deleted"


class PublicationStatus(str, Enum):
    """Publication state of an article, owned by the content workflow."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class UserRole(str, Enum):
    """Platform roles as reported by the role lookup."""

    READER = "reader"
    AUTHOR = "author"
    ADMIN = "admin"


class SortOrder(str, Enum):
    """Ordering of root threads in a comment listing."""

    NEWEST = "newest"
    OLDEST = "oldest"


class Viewer(ValueObject):
    """Who is reading or mutating comments.

    An anonymous viewer has no user_id. Elevated viewers hold a
    moderation-level role and bypass ownership and edit-window checks.
    """

    user_id: UserId | None = None
    elevated: bool = False

    @property
    def is_authenticated(self) -> bool:
        """Whether the viewer has an identity."""
        return self.user_id is not None

    def owns(self, author_id: UserId) -> bool:
        """Whether the viewer authored content by author_id."""
        return self.user_id is not None and self.user_id == author_id


ANONYMOUS = Viewer()
