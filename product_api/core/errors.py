"""Domain errors raised by the workflows and rendered into the response envelope."""

from fastapi import status


class ServiceError(Exception):
    """Base class for request-local failures surfaced to the caller with success=false."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed input (blank names, negative quantities, out-of-range paging)."""

    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(ServiceError):
    """Bad credentials, or a missing, expired or forged access token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Conflict(ServiceError):
    """Duplicate username or email."""

    status_code = status.HTTP_409_CONFLICT


class NotFound(ServiceError):
    """Missing product."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidToken(NotFound):
    """Refresh token that matches no user's stored token (already rotated, expired or forged)."""
