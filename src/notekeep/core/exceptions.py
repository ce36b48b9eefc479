"""
Error types raised by the service layer.

Each error is an ``HTTPException`` carrying its own status code, so services
raise them directly and FastAPI renders ``{"detail": ...}`` without extra
mapping code.
"""

from typing import Dict, Optional

from fastapi import HTTPException, status


class NotekeepError(HTTPException):
    """Base for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"
    default_headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_detail,
            headers=headers or self.default_headers,
        )


class ValidationError(NotekeepError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class DuplicateEmailError(NotekeepError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Email already registered"


class InvalidCredentialsError(NotekeepError):
    """Login failure; never says whether the email or the password was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"
    default_headers = {"WWW-Authenticate": "Bearer"}


class AuthenticationError(NotekeepError):
    """Bearer token could not be turned into a user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"
    default_headers = {"WWW-Authenticate": "Bearer"}


class MissingTokenError(AuthenticationError):
    default_detail = "Authorization header missing"


class InvalidTokenError(AuthenticationError):
    default_detail = "Invalid or expired token"


class UnknownUserError(AuthenticationError):
    default_detail = "User not found"


class NotFoundError(NotekeepError):
    """Used for missing notes and for notes owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Note not found"


class UnsupportedMediaTypeError(NotekeepError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    default_detail = "Only JPEG, PNG and WEBP images are allowed"


class StoreFailureError(NotekeepError):
    """Persistence layer failed; details stay in the logs."""

    default_detail = "Internal server error"
