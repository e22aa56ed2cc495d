"""Error taxonomy shared by every service.

Each error is an ``HTTPException`` so services can raise it directly and
FastAPI renders ``{"detail": message}`` with the matching status code.
Outside HTTP (tests, scripts) they behave as ordinary exceptions.
"""
from fastapi import HTTPException, status


class RequestHubError(HTTPException):
    """Base class; subclasses pin the HTTP status."""

    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(status_code=status_code or self.http_status, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(RequestHubError):
    """Malformed or missing input, raised before any write."""

    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthError(RequestHubError):
    """Missing identity (401) or insufficient identity (403)."""

    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, status_code)
        if self.status_code == status.HTTP_401_UNAUTHORIZED:
            self.headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(RequestHubError):
    http_status = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(RequestHubError):
    """Requested status is not reachable from the current one."""

    http_status = status.HTTP_409_CONFLICT


class BackendError(RequestHubError):
    """Opaque failure reported by the database."""

    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
