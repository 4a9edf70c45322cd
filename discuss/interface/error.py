"""Translation of domain errors into HTTP responses.

Every error body has the shape {"detail": {"code": ..., "message": ...}}.
"""

import logfire
from fastapi import HTTPException, status

from discuss.domain.error import (
    AlreadyExistsError,
    DomainError,
    EditWindowExpiredError,
    InternalError,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    NotPublishedError,
    UnauthenticatedError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotPublishedError: status.HTTP_403_FORBIDDEN,
    EditWindowExpiredError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidParentError: status.HTTP_400_BAD_REQUEST,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_detail(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def domain_http_exception(error: DomainError) -> HTTPException:
    """Build the HTTPException for a domain error.

    Args:
        error: Raised domain error

    Returns:
        HTTPException carrying the error code and message
    """
    status_code = next(
        (
            code
            for error_type, code in STATUS_BY_ERROR.items()
            if isinstance(error, error_type)
        ),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    message = str(error)
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        # Store details stay in the logs
        message = "Internal server error"
    return HTTPException(
        status_code=status_code, detail=error_detail(error.code, message)
    )


def unexpected_http_exception(error: Exception, operation: str) -> HTTPException:
    """Log an unexpected failure and build a generic 500 response.

    Args:
        error: The unexpected exception
        operation: What the route was doing, for the log event

    Returns:
        HTTPException with code internal_error
    """
    logfire.error(
        "Unexpected error",
        operation=operation,
        error=str(error),
        error_type=type(error).__name__,
        _exc_info=error,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail(InternalError.code, "Internal server error"),
    )
