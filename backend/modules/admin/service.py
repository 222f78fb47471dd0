"""
Admin service implementation.

Admin actions are logged with the acting admin's id.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedUser
from modules.cleanup.interfaces import ICleanupService
from modules.files.exceptions import FileItemNotFoundError
from modules.files.models import FileItem
from modules.files.repository import FileContentRepository, FileRepository
from modules.sharing.policy import is_admin, require_admin
from modules.users.exceptions import InvalidPlanError, InvalidRoleError, UserNotFoundError
from modules.users.models import AdminUserView, Plan, Role, User
from modules.users.repository import UserRepository

from .exceptions import EmptyUpdateError, ProtectedAccountError
from .interfaces import IAdminService
from .models import AdminFileView, UpdateFileRequest

logger = logging.getLogger(__name__)

LISTING_LIMIT = 100


class AdminService(IAdminService):
    """Implementation of the admin service."""

    def __init__(
        self,
        users: UserRepository,
        files: FileRepository,
        contents: FileContentRepository,
        cleanup: ICleanupService,
    ):
        self._users = users
        self._files = files
        self._contents = contents
        self._cleanup = cleanup

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def list_users(self, actor: AuthenticatedUser) -> list[AdminUserView]:
        require_admin(actor)
        return self._users.list_with_file_counts()

    async def list_files(self, actor: AuthenticatedUser) -> list[AdminFileView]:
        require_admin(actor)
        rows = self._files.list_recent(LISTING_LIMIT)
        return [AdminFileView.from_item(item, owner) for item, owner in rows]

    async def list_shares(self, actor: AuthenticatedUser) -> list[AdminFileView]:
        require_admin(actor)
        rows = self._files.list_recent(LISTING_LIMIT, public_only=True)
        return [AdminFileView.from_item(item, owner) for item, owner in rows]

    # -------------------------------------------------------------------------
    # File moderation
    # -------------------------------------------------------------------------

    async def get_file(self, actor: AuthenticatedUser, file_id: str) -> FileItem:
        require_admin(actor)
        return self._file(file_id)

    async def update_file(
        self,
        actor: AuthenticatedUser,
        file_id: str,
        request: UpdateFileRequest,
    ) -> FileItem:
        require_admin(actor)
        data = {}
        if request.name:
            data["name"] = request.name.strip()
        if request.language:
            data["language"] = request.language
        if not data:
            raise EmptyUpdateError()

        updated = self._files.update(file_id, data)
        if updated is None:
            raise FileItemNotFoundError(file_id)
        logger.info(f"Admin {actor.id} updated file {file_id}: {sorted(data)}")
        return updated

    async def set_file_blocked(self, actor: AuthenticatedUser, file_id: str, blocked: bool) -> FileItem:
        require_admin(actor)
        updated = self._files.update(file_id, {"is_blocked": blocked})
        if updated is None:
            raise FileItemNotFoundError(file_id)
        logger.info(f"Admin {actor.id} set is_blocked={blocked} on file {file_id}")
        return updated

    async def delete_file(self, actor: AuthenticatedUser, file_id: str) -> int:
        require_admin(actor)
        item = self._file(file_id)

        ids = []
        if item.is_folder and item.owner_id:
            ids = [d.id for d in self._files.list_descendants(item.owner_id, item.path)]
        ids.append(item.id)

        self._contents.delete_for_files(ids)
        removed = self._files.delete_many(ids)
        logger.info(f"Admin {actor.id} deleted file {file_id} ({removed} row(s))")
        return removed

    # -------------------------------------------------------------------------
    # Account administration
    # -------------------------------------------------------------------------

    async def delete_all_files_for_user(self, actor: AuthenticatedUser, user_id: str) -> tuple[User, int]:
        require_admin(actor)
        target = self._user(user_id)
        self._protect(actor, target, "delete-files")

        removed = await self._cleanup.delete_user_files(target.id)
        logger.info(f"Admin {actor.id} deleted {removed} file(s) of user {user_id}")
        return target, removed

    async def set_user_plan(self, actor: AuthenticatedUser, user_id: str, plan: Optional[str]) -> User:
        require_admin(actor)
        try:
            new_plan = Plan(plan)
        except ValueError:
            raise InvalidPlanError(plan)

        updated = self._users.update(user_id, {"plan": new_plan.value})
        if updated is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Admin {actor.id} set plan of user {user_id} to {new_plan.value}")
        return updated

    async def set_user_role(self, actor: AuthenticatedUser, user_id: str, role: Optional[str]) -> User:
        require_admin(actor)
        try:
            new_role = Role(role)
        except ValueError:
            raise InvalidRoleError(role)

        target = self._user(user_id)
        if target.id == actor.id and new_role != Role.ADMIN:
            raise ProtectedAccountError(user_id, "role")

        updated = self._users.update(target.id, {"role": new_role.value})
        if updated is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Admin {actor.id} set role of user {user_id} to {new_role.value}")
        return updated

    async def set_user_blocked(self, actor: AuthenticatedUser, user_id: str, blocked: bool) -> User:
        require_admin(actor)
        target = self._user(user_id)
        if blocked:
            self._protect(actor, target, "block")

        updated = self._users.update(target.id, {"is_blocked": blocked})
        if updated is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Admin {actor.id} set is_blocked={blocked} on user {user_id}")
        return updated

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _file(self, file_id: str) -> FileItem:
        item = self._files.get_by_id(file_id)
        if item is None:
            raise FileItemNotFoundError(file_id)
        return item

    def _user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def _protect(actor: AuthenticatedUser, target: User, action: str) -> None:
        if target.id == actor.id or is_admin(target):
            raise ProtectedAccountError(target.id, action)
