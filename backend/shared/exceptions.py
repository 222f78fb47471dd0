"""
Base exception classes for the Notta backend.

Each module defines its own exceptions that inherit from these bases.
Every base carries the HTTP status it maps to, so the API error handlers
can answer any NottaError without knowing the concrete type.
"""

from typing import Optional, Any


class NottaError(Exception):
    """
    Base exception for all Notta errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(NottaError):
    """Resource not found, or not visible to the caller."""

    status_code = 404


class ValidationError(NottaError):
    """Input validation failed."""

    status_code = 400


class ConflictError(NottaError):
    """Resource already exists (duplicate email, path or slug)."""

    status_code = 409


class AuthenticationError(NottaError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(NottaError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class ExternalServiceError(NottaError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
