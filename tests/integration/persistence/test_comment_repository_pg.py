"""Integration tests for PostgresCommentRepository.

These run against a migrated PostgreSQL database and are skipped unless
DISCUSS_INTEGRATION=1 is set, with DATABASE__URL pointing at that database.
"""

import os
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import AlreadyExistsError
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentStatus
from discuss.persistence.tables import articles_table, users_table
from tests.factories import at, make_article, make_comment, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    os.environ.get("DISCUSS_INTEGRATION") != "1",
    reason="needs a PostgreSQL database (set DISCUSS_INTEGRATION=1)",
)

# Real persistence, everything else as in unit tests
integration_env = create_env_fixture(unmock={"persistence"})


async def _seed(session: AsyncSession):
    author = make_user(f"pg-{uuid4().hex[:12]}")
    article = make_article()
    await session.execute(
        users_table.insert().values(
            id=author.id,
            username=author.username,
            full_name=author.full_name,
            avatar_url=author.avatar_url,
            role=author.role.value,
        )
    )
    await session.execute(
        articles_table.insert().values(
            id=article.id, title=article.title, status=article.status.value
        )
    )
    return author, article


class TestCommentRepositoryIntegration:
    """PostgresCommentRepository against a real database."""

    @pytest.mark.asyncio
    async def test_duplicate_insert_keeps_transaction_usable(self, integration_env):
        """A duplicate id raises AlreadyExists and later queries still work."""
        # Arrange
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        author, article = await _seed(session)
        comment = make_comment(article, author, "once")
        await repo.add(comment)

        # Act
        with pytest.raises(AlreadyExistsError):
            await repo.add(comment)
        stored = await repo.find_by_article(article.id)

        # Assert
        assert [c.id for c in stored] == [comment.id]

    @pytest.mark.asyncio
    async def test_soft_delete_is_conditional(self, integration_env):
        """Only the first delete matches; edits after it match nothing."""
        # Arrange
        session = await integration_env.get(AsyncSession)
        repo = await integration_env.get(CommentRepository)
        author, article = await _seed(session)
        comment = await repo.add(make_comment(article, author, "doomed"))

        # Act
        deleted = await repo.soft_delete(comment.id, at(minutes=1))
        again = await repo.soft_delete(comment.id, at(minutes=2))
        edited = await repo.update_body(comment.id, "revived", at(minutes=3))

        # Assert
        assert deleted.status == CommentStatus.DELETED
        assert again is None
        assert edited is None
        assert await repo.find_by_article(article.id) == []
        [tombstone] = await repo.find_by_article(article.id, include_deleted=True)
        assert tombstone.body == "doomed"
