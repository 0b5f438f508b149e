"""Domain errors surfaced to API callers."""

from fastapi import status


class LinkUpError(Exception):
    """Base exception for domain errors.

    Each subclass maps to one HTTP status and a stable machine-readable code.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LinkUpError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class SelfFollowError(ValidationError):
    """A user tried to follow their own creator profile."""

    def __init__(self) -> None:
        super().__init__("You cannot follow your own creator profile")


class AuthenticationError(LinkUpError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_error"


class AuthorizationError(LinkUpError):
    """Authenticated caller is not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "authorization_error"

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)


class NotFoundError(LinkUpError):
    """Referenced resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(LinkUpError):
    """Write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class StoreError(LinkUpError):
    """Relational or object store unavailable or failing."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
