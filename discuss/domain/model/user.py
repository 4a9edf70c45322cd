"""User reference.

Users are owned by the identity service. Comments only need display fields
for authors and the role used to decide elevated rights.
"""

from typing import Optional

from discuss.domain.model.common import DomainModel
from discuss.domain.value import UserId, UserRole


class User(DomainModel):
    """Minimal view of a user as seen by the comment subsystem."""

    id: UserId
    username: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: UserRole = UserRole.READER
