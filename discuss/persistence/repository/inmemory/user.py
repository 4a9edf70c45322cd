"""In-memory user repository for testing."""

from typing import Iterable, Optional

from discuss.domain.model.user import User
from discuss.domain.repository.user import UserRepository
from discuss.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._store.users.get(user_id)

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find many users at once."""
        return {
            user_id: self._store.users[user_id]
            for user_id in set(user_ids)
            if user_id in self._store.users
        }
