"""
Cleanup module interface.

Multi-step deletes run in two phases: mark the root record, then reap the
dependents and the root. Each reap step is idempotent, so an interrupted
reap is finished by running it again.
"""

from typing import Protocol, runtime_checkable

from .models import SweepReport


@runtime_checkable
class ICleanupService(Protocol):
    """Interface for deletions that span several tables."""

    async def delete_account(self, user_id: str) -> int:
        """
        Mark a user pending deletion, then reap it.

        The account stops authenticating as soon as it is marked.

        Returns:
            Number of files removed

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def reap_user(self, user_id: str) -> int:
        """Remove a marked user's contents, files and user row."""
        ...

    async def delete_user_files(self, user_id: str) -> int:
        """Remove every file a user owns; returns the rows actually removed."""
        ...

    async def sweep(self) -> SweepReport:
        """Reap pending users, expired anonymous files and expired sessions."""
        ...
