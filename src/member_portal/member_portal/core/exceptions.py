from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a field name to the first message reported for it.
    """

    def __init__(self, message: str, errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class AuthenticationError(DomainError):
    """Raised when login credentials or a bearer token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a token lacks the capability an action needs."""


class NotFoundError(DomainError):
    """Raised when no record backs the requested person identifier."""
