"""
Users module interface.

Self-service account management for the signed-in user.
"""

from typing import Protocol, runtime_checkable

from .models import ChangePasswordRequest, UpdateProfileRequest, User


@runtime_checkable
class IUserService(Protocol):
    """Interface for the caller's own account."""

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> User:
        """
        Change display name and email.

        Raises:
            EmailTakenError: Another account already uses the email
            UserNotFoundError: If the user does not exist
        """
        ...

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        """
        Raises:
            IncorrectPasswordError: current_password does not match
            PasswordUnchangedError: new_password equals the current one
        """
        ...

    async def delete_account(self, user_id: str) -> int:
        """Delete the account and all its files; returns files removed."""
        ...
