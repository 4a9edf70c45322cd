"""Unit tests for the visibility filter."""

import pytest

from discuss.domain.error import NotFoundError, NotPublishedError
from discuss.domain.service import VisibilityFilter
from discuss.domain.service.visibility import admit_tombstones, is_eligible
from discuss.domain.value import ANONYMOUS, ArticleId, CommentStatus, PublicationStatus, Viewer
from discuss.persistence.repository.inmemory import InMemoryStore
from tests.factories import at, make_article, make_comment, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

ARTICLE = make_article()
AUTHOR = make_user("author")
OTHER = make_user("other")


class TestIsEligible:
    """Tests for the per-comment eligibility predicate."""

    def test_published_comment_visible_to_anonymous(self):
        """Anyone may read published comments."""
        comment = make_comment(ARTICLE, AUTHOR)

        assert is_eligible(comment, ANONYMOUS)

    def test_pending_comment_hidden_from_others(self):
        """Pending comments are hidden from readers other than the author."""
        comment = make_comment(ARTICLE, AUTHOR, status=CommentStatus.PENDING)

        assert not is_eligible(comment, ANONYMOUS)
        assert not is_eligible(comment, Viewer(user_id=OTHER.id))

    def test_pending_comment_visible_to_author(self):
        """Authors always see their own comments."""
        comment = make_comment(ARTICLE, AUTHOR, status=CommentStatus.PENDING)

        assert is_eligible(comment, Viewer(user_id=AUTHOR.id))

    def test_pending_comment_visible_to_elevated(self):
        """Elevated viewers see every live comment."""
        comment = make_comment(ARTICLE, AUTHOR, status=CommentStatus.PENDING)

        assert is_eligible(comment, Viewer(user_id=OTHER.id, elevated=True))

    def test_deleted_comment_never_eligible(self):
        """Deleted comments are excluded for every viewer, even the author."""
        comment = make_comment(ARTICLE, AUTHOR, deleted=True)

        assert not is_eligible(comment, Viewer(user_id=AUTHOR.id))
        assert not is_eligible(comment, Viewer(user_id=OTHER.id, elevated=True))


class TestAdmitTombstones:
    """Tests for admitting deleted ancestors as anchors."""

    def test_deleted_parent_of_visible_reply_is_admitted(self):
        """A deleted parent comes back so its reply keeps its place."""
        # Arrange
        parent = make_comment(ARTICLE, AUTHOR, deleted=True)
        reply = make_comment(ARTICLE, OTHER, parent=parent, created_at=at(seconds=1))

        # Act
        readable = admit_tombstones([parent, reply], [reply])

        # Assert
        assert [c.id for c in readable] == [parent.id, reply.id]

    def test_chain_of_deleted_ancestors_is_admitted(self):
        """Consecutive deleted ancestors are all admitted."""
        grand = make_comment(ARTICLE, AUTHOR, deleted=True)
        parent = make_comment(ARTICLE, AUTHOR, parent=grand, deleted=True)
        reply = make_comment(ARTICLE, OTHER, parent=parent)

        readable = admit_tombstones([grand, parent, reply], [reply])

        assert {c.id for c in readable} == {grand.id, parent.id, reply.id}

    def test_deleted_leaf_is_dropped(self):
        """A deleted comment without visible replies stays out."""
        root = make_comment(ARTICLE, AUTHOR)
        deleted_leaf = make_comment(ARTICLE, OTHER, parent=root, deleted=True)

        readable = admit_tombstones([root, deleted_leaf], [root])

        assert [c.id for c in readable] == [root.id]

    def test_hidden_pending_parent_is_not_admitted(self):
        """Only deleted ancestors are admitted; pending ones stay hidden."""
        pending = make_comment(ARTICLE, AUTHOR, status=CommentStatus.PENDING)
        reply = make_comment(ARTICLE, OTHER, parent=pending)

        readable = admit_tombstones([pending, reply], [reply])

        assert [c.id for c in readable] == [reply.id]


class TestReadableComments:
    """Tests for VisibilityFilter.readable_comments."""

    @pytest.mark.asyncio
    async def test_missing_article_raises_not_found(self, unit_env):
        """Reading comments of an unknown article fails with NotFound."""
        # Arrange
        visibility = await unit_env.get(VisibilityFilter)

        # Act / Assert
        with pytest.raises(NotFoundError):
            await visibility.readable_comments(ArticleId(AUTHOR.id), ANONYMOUS)

    @pytest.mark.asyncio
    async def test_unpublished_article_raises_not_published(self, unit_env):
        """Drafts have no readable comments, even for elevated viewers."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        draft = store.add_article(make_article(PublicationStatus.DRAFT))
        visibility = await unit_env.get(VisibilityFilter)

        # Act / Assert
        with pytest.raises(NotPublishedError):
            await visibility.readable_comments(
                draft.id, Viewer(user_id=OTHER.id, elevated=True)
            )

    @pytest.mark.asyncio
    async def test_filters_per_viewer(self, unit_env):
        """Each viewer class gets its own slice of the stored comments."""
        # Arrange
        store = await unit_env.get(InMemoryStore)
        article = store.add_article(make_article())
        published = store.add_comment(make_comment(article, OTHER, "published"))
        own_pending = store.add_comment(
            make_comment(article, AUTHOR, "own", status=CommentStatus.PENDING)
        )
        other_pending = store.add_comment(
            make_comment(article, OTHER, "other", status=CommentStatus.PENDING)
        )
        store.add_comment(make_comment(article, AUTHOR, "gone", deleted=True))
        store.add_comment(make_comment(make_article(), AUTHOR, "elsewhere"))
        visibility = await unit_env.get(VisibilityFilter)

        # Act
        anonymous = await visibility.readable_comments(article.id, ANONYMOUS)
        author = await visibility.readable_comments(
            article.id, Viewer(user_id=AUTHOR.id)
        )
        elevated = await visibility.readable_comments(
            article.id, Viewer(user_id=make_user("mod").id, elevated=True)
        )

        # Assert
        assert {c.id for c in anonymous} == {published.id}
        assert {c.id for c in author} == {published.id, own_pending.id}
        assert {c.id for c in elevated} == {
            published.id,
            own_pending.id,
            other_pending.id,
        }
