# movieshelf/core/exceptions.py
from __future__ import annotations

"""
MovieShelf — Application Exceptions
===================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach structured metadata and integrate cleanly with the JSON error
shape from `movieshelf.core.exception_handlers`.

Key ideas
---------
- One base `AppException` that carries `message`, `details` and optional headers.
- Domain exceptions inherit from it and set the status the API surfaces.
- Authentication failures are all 401 with a neutral message.

Usage
-----
    raise ValidationException("Invalid user data.", details=[{"field": "email", "message": "..."}])
    raise DuplicateEmailException()
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ValidationException",
    "DuplicateEmailException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "MissingTokenException",
    "NotFoundException",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code (e.g., 400/401/404/409).
    message : str
        Human-readable error message (serialized as `detail` as well).
    details : dict | list | str | None
        Machine-readable details (e.g., failing fields).
    headers : dict | None
        Optional headers (e.g., `{"WWW-Authenticate": "Bearer"}`).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message: str = message
        self.details: Optional[Any] = details

    def __str__(self) -> str:
        return self.message


# ──────────────────────────────────────────────────────────────
# 🧾 Input validation
# ──────────────────────────────────────────────────────────────
class ValidationException(AppException):
    """Bad input shape or range (400)."""

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            details=details,
        )


class DuplicateEmailException(AppException):
    """Registration with an email that is already taken (409)."""

    def __init__(self, message: str = "This email is already in use.") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, message=message)


# ──────────────────────────────────────────────────────────────
# 🔑 Auth/Token exceptions
# ──────────────────────────────────────────────────────────────
class InvalidCredentialsException(AppException):
    """Unknown email or wrong password; the two are never distinguished."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message="Invalid credentials.",
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenException(AppException):
    """Raised for invalid or expired tokens (401)."""

    def __init__(self, detail: str = "Invalid or expired token.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class MissingTokenException(AppException):
    """Authorization header absent or not `Bearer <token>` (401)."""

    def __init__(self, detail: str = "Authentication token missing or malformed.") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


# ──────────────────────────────────────────────────────────────
# 🔎 Resources
# ──────────────────────────────────────────────────────────────
class NotFoundException(AppException):
    """Resource absent or owned by someone else; the API never says which."""

    def __init__(self, message: str = "Movie not found.") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, message=message)
