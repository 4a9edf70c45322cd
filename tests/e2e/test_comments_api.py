"""End-to-end tests for the comments HTTP API."""

from uuid import uuid4

import pytest

from discuss.domain.model.common import utc_now
from discuss.domain.value import PublicationStatus, UserRole
from discuss.persistence.repository.inmemory import InMemoryStore
from tests.factories import at, make_article, make_comment, make_user
from tests.harness import create_app_fixture, http_client

# App wired to in-memory persistence
app_env = create_app_fixture()


async def _seed(container):
    """Article A with C1 and C2 as roots and C3 replying to C1."""
    store = await container.get(InMemoryStore)
    author = store.add_user(make_user("ada"))
    article = store.add_article(make_article())
    c1 = store.add_comment(make_comment(article, author, "C1", created_at=at(seconds=0)))
    c2 = store.add_comment(make_comment(article, author, "C2", created_at=at(seconds=1)))
    c3 = store.add_comment(
        make_comment(article, author, "C3", parent=c1, created_at=at(seconds=2))
    )
    return store, author, article, c1, c2, c3


class TestReadComments:
    """Tests for GET /articles/{article_id}/comments."""

    @pytest.mark.asyncio
    async def test_root_pagination(self, app_env):
        """Pages hold roots with complete subtrees."""
        # Arrange
        app, container = app_env
        _, _, article, c1, c2, c3 = await _seed(container)

        async with http_client(app) as client:
            # Act
            first = await client.get(
                f"/articles/{article.id}/comments",
                params={"sort": "oldest", "limit": 1, "offset": 0},
            )
            second = await client.get(
                f"/articles/{article.id}/comments",
                params={"sort": "oldest", "limit": 1, "offset": 1},
            )

        # Assert
        assert first.status_code == 200
        data = first.json()
        assert data["total_count"] == 2
        assert data["has_more"] is True
        assert data["next_offset"] == 1
        [root] = data["comments"]
        assert root["comment_id"] == str(c1.id)
        assert root["reply_count"] == 1
        assert root["replies"][0]["comment_id"] == str(c3.id)
        assert root["replies"][0]["depth"] == 1

        data = second.json()
        assert [c["comment_id"] for c in data["comments"]] == [str(c2.id)]
        assert data["has_more"] is False
        assert "next_offset" not in data

    @pytest.mark.asyncio
    async def test_anonymous_read_has_no_permissions(self, app_env):
        """Anonymous readers see comments but may not act on them."""
        app, container = app_env
        _, _, article, *_ = await _seed(container)

        async with http_client(app) as client:
            response = await client.get(f"/articles/{article.id}/comments")

        assert response.status_code == 200
        for comment in response.json()["comments"]:
            assert comment["permissions"] == {
                "can_edit": False,
                "can_delete": False,
                "can_reply": False,
            }
            assert comment["author"]["username"] == "ada"

    @pytest.mark.asyncio
    async def test_unknown_article(self, app_env):
        """Missing articles return 404 not_found."""
        app, _ = app_env

        async with http_client(app) as client:
            response = await client.get(f"/articles/{uuid4()}/comments")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_unpublished_article(self, app_env):
        """Draft articles return 403 not_published."""
        app, container = app_env
        store = await container.get(InMemoryStore)
        article = store.add_article(make_article(status=PublicationStatus.DRAFT))

        async with http_client(app) as client:
            response = await client.get(f"/articles/{article.id}/comments")

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "not_published"

    @pytest.mark.asyncio
    async def test_out_of_range_limit(self, app_env):
        """limit above the maximum is a 400 validation_error."""
        app, container = app_env
        _, _, article, *_ = await _seed(container)

        async with http_client(app) as client:
            too_big = await client.get(
                f"/articles/{article.id}/comments", params={"limit": 101}
            )
            negative = await client.get(
                f"/articles/{article.id}/comments", params={"offset": -1}
            )

        assert too_big.status_code == 400
        assert too_big.json()["detail"]["code"] == "validation_error"
        assert negative.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_token_reads_as_anonymous(self, app_env):
        """A garbage auth cookie is ignored."""
        app, container = app_env
        _, _, article, *_ = await _seed(container)

        async with http_client(app) as client:
            client.cookies.set("auth_token", "not-a-jwt")
            response = await client.get(f"/articles/{article.id}/comments")

        assert response.status_code == 200


class TestWriteComments:
    """Tests for POST, PUT and DELETE."""

    @pytest.mark.asyncio
    async def test_delete_then_edit_leaves_tombstone(self, app_env):
        """After a delete the edit is 404 and the reply hangs off a tombstone."""
        # Arrange
        app, container = app_env
        _, author, article, c1, _, c3 = await _seed(container)

        async with http_client(app, author) as client:
            # Act
            deleted = await client.delete(f"/comments/{c1.id}")
            edited = await client.put(f"/comments/{c1.id}", json={"content": "undo"})
            read = await client.get(
                f"/articles/{article.id}/comments", params={"sort": "oldest"}
            )

        # Assert
        assert deleted.status_code == 204
        assert edited.status_code == 404
        assert edited.json()["detail"]["code"] == "not_found"
        tombstone = read.json()["comments"][0]
        assert tombstone["comment_id"] == str(c1.id)
        assert tombstone["body"] == {"kind": "tombstone"}
        assert tombstone["author"] is None
        assert tombstone["replies"][0]["comment_id"] == str(c3.id)
        assert tombstone["replies"][0]["body"] == {"kind": "visible", "text": "C3"}

    @pytest.mark.asyncio
    async def test_create_reply(self, app_env):
        """Signed-in users can reply; the reply shows up nested."""
        # Arrange
        app, container = app_env
        store, _, article, c1, _, _ = await _seed(container)
        replier = store.add_user(make_user("grace"))

        async with http_client(app, replier) as client:
            # Act
            created = await client.post(
                f"/articles/{article.id}/comments",
                json={"content": "  Agreed  ", "parent_comment_id": str(c1.id)},
            )
            read = await client.get(
                f"/articles/{article.id}/comments", params={"sort": "oldest"}
            )

        # Assert
        assert created.status_code == 201
        comment = created.json()["comment"]
        assert comment["body"] == {"kind": "visible", "text": "Agreed"}
        assert comment["parent_id"] == str(c1.id)
        assert comment["author"]["username"] == "grace"
        replies = read.json()["comments"][0]["replies"]
        assert [r["comment_id"] for r in replies][-1] == comment["comment_id"]

    @pytest.mark.asyncio
    async def test_create_requires_auth(self, app_env):
        """Anonymous creates are 401."""
        app, container = app_env
        _, _, article, *_ = await _seed(container)

        async with http_client(app) as client:
            response = await client.post(
                f"/articles/{article.id}/comments", json={"content": "hi"}
            )

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "unauthenticated"

    @pytest.mark.asyncio
    async def test_create_validation_errors(self, app_env):
        """Blank content and foreign parents are 400."""
        app, container = app_env
        store, author, article, *_ = await _seed(container)
        other_article = store.add_article(make_article(title="Other"))
        foreign = store.add_comment(make_comment(other_article, author))

        async with http_client(app, author) as client:
            blank = await client.post(
                f"/articles/{article.id}/comments", json={"content": "   "}
            )
            too_long = await client.post(
                f"/articles/{article.id}/comments", json={"content": "x" * 5001}
            )
            wrong_parent = await client.post(
                f"/articles/{article.id}/comments",
                json={"content": "hi", "parent_comment_id": str(foreign.id)},
            )
            missing_parent = await client.post(
                f"/articles/{article.id}/comments",
                json={"content": "hi", "parent_comment_id": str(uuid4())},
            )

        assert blank.status_code == 400
        assert blank.json()["detail"]["code"] == "validation_error"
        assert too_long.status_code == 400
        assert wrong_parent.status_code == 400
        assert wrong_parent.json()["detail"]["code"] == "invalid_parent"
        assert missing_parent.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_comment_id_conflicts(self, app_env):
        """Retrying a committed create returns 409 already_exists."""
        app, container = app_env
        store, author, article, *_ = await _seed(container)
        payload = {"content": "once", "comment_id": str(uuid4())}

        async with http_client(app, author) as client:
            first = await client.post(f"/articles/{article.id}/comments", json=payload)
            retry = await client.post(f"/articles/{article.id}/comments", json=payload)

        assert first.status_code == 201
        assert retry.status_code == 409
        assert retry.json()["detail"]["code"] == "already_exists"
        assert len(store.comments) == 4

    @pytest.mark.asyncio
    async def test_edit_window_and_admin_override(self, app_env):
        """Old comments are locked for their author but not for admins."""
        # Arrange
        app, container = app_env
        store, author, _, c1, _, _ = await _seed(container)
        admin = store.add_user(make_user("mod", role=UserRole.ADMIN))

        # Act
        async with http_client(app, author) as client:
            by_author = await client.put(f"/comments/{c1.id}", json={"content": "late"})
        async with http_client(app, admin) as client:
            by_admin = await client.put(f"/comments/{c1.id}", json={"content": "[removed link]"})

        # Assert
        assert by_author.status_code == 403
        assert by_author.json()["detail"]["code"] == "edit_window_expired"
        assert by_admin.status_code == 200
        assert by_admin.json()["comment"]["body"]["text"] == "[removed link]"

    @pytest.mark.asyncio
    async def test_author_edits_fresh_comment(self, app_env):
        """Edits inside the window succeed."""
        app, container = app_env
        store, author, article, *_ = await _seed(container)
        fresh = store.add_comment(make_comment(article, author, "fersh", created_at=utc_now()))

        async with http_client(app, author) as client:
            response = await client.put(f"/comments/{fresh.id}", json={"content": "fresh"})

        assert response.status_code == 200
        assert response.json()["comment"]["body"]["text"] == "fresh"
        assert response.json()["comment"]["permissions"]["can_edit"] is True

    @pytest.mark.asyncio
    async def test_delete_by_stranger_forbidden(self, app_env):
        """Only the author or an admin may delete."""
        app, container = app_env
        store, _, _, c1, _, _ = await _seed(container)
        stranger = store.add_user(make_user("eve"))

        async with http_client(app, stranger) as client:
            response = await client.delete(f"/comments/{c1.id}")

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "not_authorized"
        assert store.comments[c1.id].deleted_at is None

    @pytest.mark.asyncio
    async def test_bad_comment_id_is_422(self, app_env):
        """Path ids that are not UUIDs are rejected by request validation."""
        app, container = app_env
        _, author, *_ = await _seed(container)

        async with http_client(app, author) as client:
            response = await client.delete("/comments/not-a-uuid")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_very_deep_reply_chain_is_readable(self, app_env):
        """A chain of hundreds of replies still renders with bounded nesting."""
        # Arrange
        app, container = app_env
        store = await container.get(InMemoryStore)
        author = store.add_user(make_user("ada"))
        article = store.add_article(make_article())
        parent = None
        for i in range(300):
            parent = store.add_comment(
                make_comment(article, author, f"r{i}", parent=parent, created_at=at(seconds=i))
            )

        # Act
        async with http_client(app) as client:
            response = await client.get(f"/articles/{article.id}/comments")

        # Assert
        assert response.status_code == 200
        node = response.json()["comments"][0]
        levels = 1
        while node["replies"] and node["depth"] < 4:
            node = node["replies"][0]
            levels += 1
        assert levels == 5
        flattened = node["replies"]
        assert [r["depth"] for r in flattened] == list(range(5, 300))
        assert all(r["replies"] == [] for r in flattened)


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_health(self, app_env):
        """The health endpoint reports status and version."""
        app, _ = app_env

        async with http_client(app) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "git_sha" in response.json()
