"""PostgreSQL implementation of User repository."""

from typing import Iterable, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import InternalError
from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId
from discuss.persistence.mappers import row_to_user
from discuss.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("User lookup failed", user_id=str(user_id), error=str(e))
            raise InternalError("Failed to load user") from e
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_ids(self, user_ids: Iterable[UserId]) -> dict[UserId, User]:
        """Find many users in one query."""
        ids = list(set(user_ids))
        if not ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(ids))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("User batch lookup failed", count=len(ids), error=str(e))
            raise InternalError("Failed to load users") from e

        users = [row_to_user(row._asdict()) for row in result.fetchall()]
        return {user.id: user for user in users}
