"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import CreateCommentRequest, CreateCommentUseCase
from discuss.domain.error import AlreadyExistsError, UnauthenticatedError
from discuss.persistence.repository.inmemory import InMemoryStore
from tests.factories import make_article, make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestCreateComment:
    """Tests for the create use case."""

    @pytest.mark.asyncio
    async def test_returns_created_comment_with_author(self, unit_env):
        """The response carries the stored comment and its author."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        author = store.add_user(make_user("ada"))
        article = store.add_article(make_article())
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                article_id=article.id, user_id=author.id, content="  Nice work  "
            )
        )

        # Assert
        comment = response.comment
        assert comment.body.text == "Nice work"
        assert comment.author.username == "ada"
        assert comment.status == "published"
        assert comment.permissions.can_edit is True
        assert len(store.comments) == 1

    @pytest.mark.asyncio
    async def test_client_chosen_id_is_kept(self, unit_env):
        """A client-supplied comment_id becomes the comment's id."""
        store = await unit_env.get(InMemoryStore)
        author = store.add_user(make_user("ada"))
        article = store.add_article(make_article())
        parent = store.add_comment(make_comment(article, author))
        use_case = await unit_env.get(CreateCommentUseCase)
        comment_id = uuid4()

        response = await use_case.execute(
            CreateCommentRequest(
                article_id=article.id,
                user_id=author.id,
                content="reply",
                parent_comment_id=parent.id,
                comment_id=comment_id,
            )
        )

        assert response.comment.comment_id == str(comment_id)
        assert response.comment.parent_id == str(parent.id)

    @pytest.mark.asyncio
    async def test_retry_with_same_id_conflicts(self, unit_env):
        """Submitting the same comment_id twice raises AlreadyExists."""
        store = await unit_env.get(InMemoryStore)
        author = store.add_user(make_user("ada"))
        article = store.add_article(make_article())
        use_case = await unit_env.get(CreateCommentUseCase)
        request = CreateCommentRequest(
            article_id=article.id, user_id=author.id, content="hi", comment_id=uuid4()
        )
        await use_case.execute(request)

        with pytest.raises(AlreadyExistsError):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        """Anonymous requests are rejected."""
        store = await unit_env.get(InMemoryStore)
        article = store.add_article(make_article())
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CreateCommentRequest(article_id=article.id, user_id=None, content="hi")
            )
