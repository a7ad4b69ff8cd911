"""Typed application errors translated to HTTP responses at the API boundary."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single rejected input field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """Base exception for errors with a client-facing status code."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(AppError):
    """Raised when request input fails validation."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        violations: Sequence[FieldViolation],
        message: str | None = None,
    ) -> None:
        self.violations = list(violations)
        super().__init__(message)


class UnauthenticatedError(AppError):
    """Raised when the caller cannot be identified."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(AppError):
    """Raised when the caller is identified but not permitted."""

    status_code = 403
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    """Raised when a unique field value is already taken."""

    status_code = 409
    default_message = "Duplicate field value"
