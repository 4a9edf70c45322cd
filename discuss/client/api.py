"""HTTP client for the comments API."""

from typing import Any
from uuid import UUID

import httpx
import logfire

from discuss.application.usecase.comment import (
    CommentItem,
    CreateCommentResponse,
    GetCommentsResponse,
    UpdateCommentResponse,
)
from discuss.domain.value import SortOrder
from discuss.util.observability import instrument_httpx


class CommentsAPIError(Exception):
    """A request to the comments API failed.

    Attributes:
        status_code: HTTP status, None when the server was never reached
        code: Machine-readable error code from the response body
        message: Human-readable reason, safe to show to users
    """

    def __init__(self, status_code: int | None, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(message)


def _error_from_response(response: httpx.Response) -> CommentsAPIError:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None

    if isinstance(detail, dict) and "code" in detail:
        return CommentsAPIError(
            response.status_code, detail["code"], detail.get("message", "")
        )
    if isinstance(detail, list) and detail:
        # Request validation failure reported by the framework
        return CommentsAPIError(
            response.status_code,
            "validation_error",
            detail[0].get("msg", "Invalid request"),
        )
    return CommentsAPIError(
        response.status_code,
        "http_error",
        response.reason_phrase or f"Request failed with status {response.status_code}",
    )


class CommentsAPIClient:
    """Typed wrapper around the comment endpoints.

    The caller owns the httpx client, including its base URL and the
    auth_token cookie. Requests are never retried here.
    """

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize the API client.

        Args:
            http_client: Configured async HTTP client
        """
        self.http = http_client

    @classmethod
    def connect(
        cls, base_url: str, auth_token: str | None = None, timeout: float = 10.0
    ) -> "CommentsAPIClient":
        """Create a client with its own connection pool.

        Args:
            base_url: API base URL
            auth_token: Session JWT, sent as the auth_token cookie
            timeout: Per-request timeout in seconds

        Returns:
            Client ready for use; close it with aclose()
        """
        cookies = {"auth_token": auth_token} if auth_token else None
        http_client = httpx.AsyncClient(base_url=base_url, cookies=cookies, timeout=timeout)
        instrument_httpx(http_client)
        return cls(http_client)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "CommentsAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logfire.warn("Comments API unreachable", method=method, url=url, error=str(e))
            raise CommentsAPIError(None, "network_error", "Could not reach the server") from e

        if response.is_error:
            error = _error_from_response(response)
            logfire.warn(
                "Comments API request failed",
                method=method,
                url=url,
                status_code=error.status_code,
                code=error.code,
            )
            raise error
        return response

    async def get_comments(
        self,
        article_id: UUID | str,
        sort: SortOrder = SortOrder.NEWEST,
        limit: int | None = None,
        offset: int = 0,
    ) -> GetCommentsResponse:
        """Fetch one page of root comments with their replies."""
        params: dict[str, Any] = {"sort": sort.value, "offset": offset}
        if limit is not None:
            params["limit"] = limit
        response = await self._request(
            "GET", f"/articles/{article_id}/comments", params=params
        )
        return GetCommentsResponse.model_validate(response.json())

    async def create_comment(
        self,
        article_id: UUID | str,
        content: str,
        parent_comment_id: UUID | str | None = None,
        comment_id: UUID | str | None = None,
    ) -> CommentItem:
        """Post a comment or a reply.

        Raises:
            CommentsAPIError: On any failure, including already_exists when a
                comment with comment_id was committed earlier
        """
        payload: dict[str, Any] = {"content": content}
        if parent_comment_id is not None:
            payload["parent_comment_id"] = str(parent_comment_id)
        if comment_id is not None:
            payload["comment_id"] = str(comment_id)
        response = await self._request(
            "POST", f"/articles/{article_id}/comments", json=payload
        )
        return CreateCommentResponse.model_validate(response.json()).comment

    async def update_comment(self, comment_id: UUID | str, content: str) -> CommentItem:
        """Replace a comment's content."""
        response = await self._request(
            "PUT", f"/comments/{comment_id}", json={"content": content}
        )
        return UpdateCommentResponse.model_validate(response.json()).comment

    async def delete_comment(self, comment_id: UUID | str) -> None:
        """Soft-delete a comment."""
        await self._request("DELETE", f"/comments/{comment_id}")
