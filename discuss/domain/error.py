"""Domain layer errors.

Every error carries a stable snake_case code so the interface layer can map
it 1:1 onto an HTTP status and a machine-readable error body.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class UnauthenticatedError(DomainError):
    """Raised when an operation requires an identity and none was given."""

    code = "unauthenticated"

    def __init__(self, action: str):
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content they neither own nor moderate."""

    code = "not_authorized"

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is missing or logically absent."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotPublishedError(DomainError):
    """Raised when an article is not in a publicly visible state."""

    code = "not_published"

    def __init__(self, article_id: str):
        self.article_id = article_id
        super().__init__(f"Article {article_id} is not published")


class ValidationError(DomainError):
    """Domain validation error (malformed input)."""

    code = "validation_error"


class InvalidParentError(DomainError):
    """Raised when a reply would violate the reply-tree structure."""

    code = "invalid_parent"


class EditWindowExpiredError(DomainError):
    """Raised when an author edits a comment after the edit window closed."""

    code = "edit_window_expired"

    def __init__(self, comment_id: str, window_minutes: int):
        self.comment_id = comment_id
        self.window_minutes = window_minutes
        super().__init__(
            f"Comment can only be edited within {window_minutes} minutes of creation"
        )


class AlreadyExistsError(DomainError):
    """Raised when a create collides with an existing row (usually a retry)."""

    code = "already_exists"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class InternalError(DomainError):
    """Unexpected store failure. Reads are safe to retry, writes are not."""

    code = "internal_error"
