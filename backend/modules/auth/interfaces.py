"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.users.models import User

from .models import RegisterRequest


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.
    """

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """
        Create an account.

        Returns:
            The created user and a freshly issued session token

        Raises:
            ValidationError: Missing fields or short password
            EmailTakenError: If the email is already registered
        """
        ...

    async def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """
        Check credentials and issue a session token.

        Raises:
            ValidationError: If email or password is missing
            InvalidCredentialsError: If they do not match an account
            UserBlockedError: If the account is blocked
        """
        ...

    async def authenticate(self, token: str | None) -> AuthenticatedUser:
        """
        Verify a session token and load the principal it names.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
            UserNotFoundError: If the user no longer exists
            UserBlockedError: If the account is blocked
        """
        ...

    async def get_user(self, user_id: str) -> User:
        """
        Get a stored user.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def request_password_reset(self, email: str | None) -> None:
        """Store a reset token and mail a link. Silent when email is unknown."""
        ...

    async def verify_reset_token(self, token: str | None) -> None:
        """Raises InvalidResetTokenError unless the token is live."""
        ...

    async def reset_password(self, token: str | None, password: str | None) -> None:
        """Replace the password of the reset token's holder."""
        ...
