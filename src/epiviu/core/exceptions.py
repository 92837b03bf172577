from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an operation targets an id with no matching rows."""


class AuthenticationError(DomainError):
    """Raised when login credentials or session tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class IntegrityError(DomainError):
    """Foreign-key or uniqueness violation reported by the store."""

    def __init__(self, message: str, *, errno: Optional[int] = None):
        super().__init__(message)
        self.errno = errno


class StoreUnavailableError(DomainError):
    """The persistence layer cannot be reached."""
