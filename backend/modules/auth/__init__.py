"""
Authentication module.

Handles registration, login, session tokens and password reset.

Public API:
- IAuthService: Interface for auth operations
- TokenService: Issues and verifies session tokens
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .tokens import TokenService, has_token_shape
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UserBlockedError,
    AdminRequiredError,
    InvalidResetTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Tokens
    "TokenService",
    "has_token_shape",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UserBlockedError",
    "AdminRequiredError",
    "InvalidResetTokenError",
]
