"""
User service implementation.
"""

import logging

from modules.auth.passwords import hash_password, verify_password
from modules.cleanup.interfaces import ICleanupService

from .exceptions import (
    EmailTakenError,
    IncorrectPasswordError,
    PasswordUnchangedError,
    UserNotFoundError,
)
from .interfaces import IUserService
from .models import ChangePasswordRequest, UpdateProfileRequest, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Implementation of the user service."""

    def __init__(self, users: UserRepository, cleanup: ICleanupService):
        self._users = users
        self._cleanup = cleanup

    async def update_profile(self, user_id: str, request: UpdateProfileRequest) -> User:
        email = request.email.strip().lower()
        if self._users.email_taken_by_other(email, user_id):
            raise EmailTakenError()

        user = self._users.update(user_id, {"name": request.name.strip(), "email": email})
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def change_password(self, user_id: str, request: ChangePasswordRequest) -> None:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not verify_password(request.current_password, user.password_hash):
            raise IncorrectPasswordError()
        if request.new_password == request.current_password:
            raise PasswordUnchangedError()

        self._users.update(user_id, {"password_hash": hash_password(request.new_password)})
        logger.info(f"Password changed for user {user_id}")

    async def delete_account(self, user_id: str) -> int:
        return await self._cleanup.delete_account(user_id)
