from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` holds field-level messages as ``{"field": ..., "message": ...}``.
    """

    def __init__(self, message: str = "Validation failed", errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls("Validation failed", [{"field": field, "message": message}])


class NotFoundError(DomainError):
    """Raised when no row matches the given business or primary key."""


class ConflictError(DomainError):
    """Raised when a write collides with an existing row."""


class DuplicateEmailError(ConflictError):
    """Raised when an employee email is already taken."""

    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)


class DuplicateEmployeeIdError(ConflictError):
    """Raised when an issued business id is already present in storage."""


class InvalidStateError(ConflictError):
    """Raised when a record is asked to make a transition its status forbids."""
