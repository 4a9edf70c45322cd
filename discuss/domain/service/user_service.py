"""User domain service."""

from typing import Iterable

import logfire

from discuss.config import CommentSettings
from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import ANONYMOUS, UserId, Viewer

from .base import Service


class UserService(Service):
    """Identity and role lookups used by the comment policy."""

    def __init__(
        self, user_repository: UserRepository, comment_settings: CommentSettings
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            comment_settings: Comment policy settings (elevated roles)
        """
        self.user_repository = user_repository
        self.elevated_roles = set(comment_settings.elevated_roles)

    async def resolve_viewer(self, user_id: UserId | None) -> Viewer:
        """Turn an authenticated user id into a Viewer with its role flag.

        A valid identity without a user row is treated as an ordinary,
        non-elevated user.

        Args:
            user_id: Authenticated user ID, or None for anonymous requests

        Returns:
            Viewer for policy decisions
        """
        if user_id is None:
            return ANONYMOUS

        with logfire.span("user_service.resolve_viewer", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Authenticated user has no profile", user_id=str(user_id))
                return Viewer(user_id=user_id, elevated=False)
            elevated = user.role.value in self.elevated_roles
            return Viewer(user_id=user_id, elevated=elevated)

    async def get_authors(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Fetch display data for a set of authors.

        Args:
            user_ids: Author IDs

        Returns:
            Mapping of author ID to user; unknown authors are absent
        """
        unique_ids = set(user_ids)
        if not unique_ids:
            return {}
        with logfire.span("user_service.get_authors", count=len(unique_ids)):
            return await self.user_repository.find_by_ids(unique_ids)
