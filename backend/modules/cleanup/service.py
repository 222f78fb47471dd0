"""
Cleanup service implementation.
"""

import logging

from shared.repository import utcnow
from modules.files.repository import FileContentRepository, FileRepository
from modules.sessions.repository import SessionRepository
from modules.users.exceptions import UserNotFoundError
from modules.users.repository import UserRepository

from .interfaces import ICleanupService
from .models import SweepReport

logger = logging.getLogger(__name__)


class CleanupService(ICleanupService):
    """
    Two-phase deletion across users, files, file_contents and sessions.

    Reaping order is content versions, then files, then the user row, so
    nothing is ever left pointing at a row that is already gone.
    """

    def __init__(
        self,
        users: UserRepository,
        files: FileRepository,
        contents: FileContentRepository,
        sessions: SessionRepository,
    ):
        self._users = users
        self._files = files
        self._contents = contents
        self._sessions = sessions

    async def delete_account(self, user_id: str) -> int:
        if not self._users.mark_pending_deletion(user_id):
            raise UserNotFoundError(user_id)
        logger.info(f"User {user_id} marked for deletion")
        return await self.reap_user(user_id)

    async def reap_user(self, user_id: str) -> int:
        removed = await self.delete_user_files(user_id)
        self._users.delete(user_id)
        logger.info(f"Reaped user {user_id} ({removed} file(s))")
        return removed

    async def delete_user_files(self, user_id: str) -> int:
        file_ids = self._files.list_ids_by_owner(user_id)
        self._contents.delete_for_files(file_ids)
        return self._files.delete_by_owner(user_id)

    async def sweep(self) -> SweepReport:
        report = SweepReport()

        for user_id in self._users.list_pending_deletion():
            report.files_removed += await self.reap_user(user_id)
            report.users_reaped += 1

        expired_ids = self._files.list_expired_ids(utcnow())
        self._contents.delete_for_files(expired_ids)
        report.expired_files_removed = self._files.delete_many(expired_ids)

        report.sessions_removed = self._sessions.delete_expired(utcnow())

        logger.info(
            f"Cleanup sweep: {report.users_reaped} user(s), "
            f"{report.files_removed + report.expired_files_removed} file(s), "
            f"{report.sessions_removed} session(s)"
        )
        return report
