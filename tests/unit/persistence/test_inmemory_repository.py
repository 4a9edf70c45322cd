"""Unit tests for the in-memory repositories and row mappers."""

from uuid import uuid4

import pytest

from discuss.domain.error import AlreadyExistsError
from discuss.domain.value import CommentId, CommentStatus, UserId
from discuss.persistence.mappers import comment_to_dict, row_to_comment
from discuss.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from tests.factories import at, make_article, make_comment, make_user


class TestInMemoryCommentRepository:
    """Tests for InMemoryCommentRepository."""

    @pytest.mark.asyncio
    async def test_find_by_article_excludes_deleted_by_default(self):
        """Deleted rows are only returned on request."""
        # Arrange
        store = InMemoryStore()
        article = make_article()
        author = make_user()
        live = store.add_comment(make_comment(article, author, "live"))
        gone = store.add_comment(make_comment(article, author, "gone", deleted=True))
        store.add_comment(make_comment(make_article(), author, "elsewhere"))
        repo = InMemoryCommentRepository(store)

        # Act
        default = await repo.find_by_article(article.id)
        everything = await repo.find_by_article(article.id, include_deleted=True)

        # Assert
        assert [c.id for c in default] == [live.id]
        assert {c.id for c in everything} == {live.id, gone.id}

    @pytest.mark.asyncio
    async def test_add_rejects_duplicate_id(self):
        """Inserting an existing id raises AlreadyExists."""
        repo = InMemoryCommentRepository()
        comment = make_comment(make_article(), make_user())
        await repo.add(comment)

        with pytest.raises(AlreadyExistsError):
            await repo.add(comment)

    @pytest.mark.asyncio
    async def test_soft_delete_only_once(self):
        """A deleted row is frozen: no second delete, no edit."""
        # Arrange
        store = InMemoryStore()
        comment = store.add_comment(make_comment(make_article(), make_user()))
        repo = InMemoryCommentRepository(store)

        # Act
        deleted = await repo.soft_delete(comment.id, at(minutes=5))
        again = await repo.soft_delete(comment.id, at(minutes=6))
        edited = await repo.update_body(comment.id, "new", at(minutes=7))

        # Assert
        assert deleted.status == CommentStatus.DELETED
        assert deleted.deleted_at == at(minutes=5)
        assert again is None
        assert edited is None
        assert store.comments[comment.id].deleted_at == at(minutes=5)

    @pytest.mark.asyncio
    async def test_update_body_on_missing_comment(self):
        """Updating an unknown id returns None."""
        repo = InMemoryCommentRepository()

        assert await repo.update_body(CommentId(uuid4()), "x", at()) is None


class TestInMemoryUserRepository:
    """Tests for InMemoryUserRepository."""

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_unknown(self):
        """Unknown ids are absent from the result."""
        store = InMemoryStore()
        user = store.add_user(make_user("ada"))
        repo = InMemoryUserRepository(store)

        found = await repo.find_by_ids([user.id, UserId(uuid4()), user.id])

        assert found == {user.id: user}


class TestCommentMappers:
    """Tests for the comment row mappers."""

    def test_row_round_trip_keeps_status_and_parent(self):
        """A comment survives conversion to a row and back."""
        article = make_article()
        author = make_user()
        parent = make_comment(article, author)
        reply = make_comment(article, author, "reply", parent=parent)

        row = comment_to_dict(reply)

        assert row["status"] == "published"
        assert row_to_comment(row) == reply

    def test_string_ids_are_parsed(self):
        """Rows with textual UUIDs map to UUID ids."""
        comment = make_comment(make_article(), make_user())
        row = comment_to_dict(comment)
        row.update(
            id=str(comment.id),
            article_id=str(comment.article_id),
            author_id=str(comment.author_id),
        )

        assert row_to_comment(row).id == comment.id
