"""User lookup interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from discuss.domain.model.user import User
from discuss.domain.value import UserId


class UserRepository(ABC):
    """Read-only access to users for role checks and author display."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find many users at once.

        Args:
            user_ids: User IDs to look up

        Returns:
            Mapping of found user IDs to users; unknown IDs are absent
        """
        pass
