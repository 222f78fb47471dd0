"""
Admin module interface.

Every method takes the acting principal and refuses anyone who does not
hold the admin role.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.files.models import FileItem
from modules.users.models import AdminUserView, User

from .models import AdminFileView, UpdateFileRequest


@runtime_checkable
class IAdminService(Protocol):
    """Interface for moderation and account administration."""

    async def list_users(self, actor: AuthenticatedUser) -> list[AdminUserView]:
        ...

    async def list_files(self, actor: AuthenticatedUser) -> list[AdminFileView]:
        """The latest files, newest first."""
        ...

    async def list_shares(self, actor: AuthenticatedUser) -> list[AdminFileView]:
        """The latest publicly shared items, newest first."""
        ...

    async def get_file(self, actor: AuthenticatedUser, file_id: str) -> FileItem:
        ...

    async def update_file(
        self,
        actor: AuthenticatedUser,
        file_id: str,
        request: UpdateFileRequest,
    ) -> FileItem:
        ...

    async def set_file_blocked(self, actor: AuthenticatedUser, file_id: str, blocked: bool) -> FileItem:
        """Block or unblock an item. Repeating the same call changes nothing."""
        ...

    async def delete_file(self, actor: AuthenticatedUser, file_id: str) -> int:
        ...

    async def delete_all_files_for_user(self, actor: AuthenticatedUser, user_id: str) -> tuple[User, int]:
        """
        Remove every file a user owns.

        Returns:
            The target user and the number of files actually removed

        Raises:
            UserNotFoundError: Unknown target
            ProtectedAccountError: Target is an admin or the acting admin
        """
        ...

    async def set_user_plan(self, actor: AuthenticatedUser, user_id: str, plan: Optional[str]) -> User:
        """
        Raises:
            InvalidPlanError: plan is not free, premium or enterprise
                (checked before the user is looked up)
            UserNotFoundError: Unknown target
        """
        ...

    async def set_user_role(self, actor: AuthenticatedUser, user_id: str, role: Optional[str]) -> User:
        ...

    async def set_user_blocked(self, actor: AuthenticatedUser, user_id: str, blocked: bool) -> User:
        ...
