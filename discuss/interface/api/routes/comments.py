"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from discuss.domain.error import DomainError
from discuss.domain.service import JWTService
from discuss.domain.value import SortOrder
from discuss.interface.error import domain_http_exception, unexpected_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def _current_user_id(jwt_service: JWTService, auth_token: str | None) -> UUID | None:
    """Resolve the signed-in user from the auth cookie, None if anonymous."""
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if user_id is None:
        return None
    try:
        return UUID(user_id)
    except ValueError:
        logfire.warn("Token carries a malformed user id", user_id=user_id)
        return None


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str
    parent_comment_id: UUID | None = None  # Parent comment ID for replies
    comment_id: UUID | None = None  # Client-generated, makes retries detectable


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str


@router.get("/articles/{article_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    article_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: SortOrder = SortOrder.NEWEST,
    limit: int | None = None,
    offset: int = 0,
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get one page of root comments on an article, each with all its replies.

    Anonymous readers are allowed. Signed-in readers also see their own
    unpublished comments and get per-comment permissions.

    Args:
        article_id: Article UUID
        get_comments_use_case: Get comments use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: newest or oldest first (roots only)
        limit: Roots per page (1..100, default 50)
        offset: Roots to skip
        auth_token: JWT token from cookie (optional)

    Returns:
        Nested comments plus pagination metadata
    """
    request = GetCommentsRequest(
        article_id=article_id,
        user_id=_current_user_id(jwt_service, auth_token),
        sort=sort,
        limit=limit,
        offset=offset,
    )
    try:
        return await get_comments_use_case.execute(request)
    except DomainError as e:
        raise domain_http_exception(e)
    except Exception as e:
        raise unexpected_http_exception(e, "get_comments")


@router.post(
    "/articles/{article_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    article_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Create a comment on an article or reply to another comment.

    Requires authentication.

    Args:
        article_id: Article UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The created comment

    Raises:
        HTTPException: 400, 401, 403, 404 or 409 as mapped from domain errors
    """
    use_case_request = CreateCommentRequest(
        article_id=article_id,
        user_id=_current_user_id(jwt_service, auth_token),
        content=request.content,
        parent_comment_id=request.parent_comment_id,
        comment_id=request.comment_id,
    )
    try:
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise domain_http_exception(e)
    except Exception as e:
        raise unexpected_http_exception(e, "create_comment")


@router.put("/comments/{comment_id}", response_model=UpdateCommentResponse)
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentResponse:
    """Edit a comment's content.

    Authors may edit for 15 minutes after posting; admins at any time.

    Args:
        comment_id: Comment UUID
        request: New content
        update_comment_use_case: Update comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The updated comment
    """
    use_case_request = UpdateCommentRequest(
        comment_id=comment_id,
        user_id=_current_user_id(jwt_service, auth_token),
        content=request.content,
    )
    try:
        return await update_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise domain_http_exception(e)
    except Exception as e:
        raise unexpected_http_exception(e, "update_comment")


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Soft-delete a comment. Replies stay and the comment shows as deleted."""
    use_case_request = DeleteCommentRequest(
        comment_id=comment_id,
        user_id=_current_user_id(jwt_service, auth_token),
    )
    try:
        await delete_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise domain_http_exception(e)
    except Exception as e:
        raise unexpected_http_exception(e, "delete_comment")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
