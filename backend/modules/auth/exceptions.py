"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, AuthorizationError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or tampered with."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password do not match. Never says which one."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class UserBlockedError(AuthorizationError):
    """Raised when a blocked account tries to authenticate."""

    def __init__(self):
        super().__init__("Account is blocked", code="USER_BLOCKED")


class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin principal calls an admin operation."""

    def __init__(self, user_role: str = "anonymous"):
        super().__init__(
            "Access denied",
            code="ADMIN_REQUIRED",
            details={"required_role": "admin", "user_role": user_role},
        )


class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is unknown or expired."""

    def __init__(self):
        super().__init__("Invalid or expired reset token", code="INVALID_RESET_TOKEN")
