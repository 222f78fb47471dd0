"""
Authorization policy.

Pure decision functions shared by every module. Each `require_*` either
returns normally or raises the error the caller should answer with; none
of them touch the database.
"""

from datetime import datetime
from typing import Any, Optional

from modules.auth.exceptions import AdminRequiredError
from modules.files.models import FileItem, FileType
from modules.files.paths import is_within
from modules.users.models import Role

from .exceptions import FileNotInFolderError, FolderNotSharedError, SharedItemNotFoundError


def is_admin(user: Any) -> bool:
    """The single admin check: an explicit `admin` role."""
    return user is not None and getattr(user, "role", None) == Role.ADMIN.value


def require_admin(user: Any) -> None:
    """Raise AdminRequiredError unless user holds the admin role."""
    if not is_admin(user):
        role = getattr(user, "role", None) or "anonymous"
        raise AdminRequiredError(str(getattr(role, "value", role)))


def is_contained(folder: FileItem, item: FileItem) -> bool:
    """Whether item lives below folder by path."""
    return is_within(folder.path, item.path)


def is_servable(item: FileItem, now: datetime) -> bool:
    """Whether an item may be read through a public link right now."""
    return (
        item.is_public
        and not item.is_blocked
        and item.share_code is not None
        and not item.is_expired(now)
    )


def require_servable(item: Optional[FileItem], now: datetime) -> FileItem:
    if item is None or not is_servable(item, now):
        raise SharedItemNotFoundError()
    return item


def require_shared_folder(folder: Optional[FileItem], folder_id: str, now: datetime) -> FileItem:
    """Check that folder is a folder reachable through a public link."""
    if folder is None or folder.type != FileType.FOLDER or not is_servable(folder, now):
        raise FolderNotSharedError(folder_id)
    return folder


def require_file_in_folder(
    folder: FileItem,
    item: Optional[FileItem],
    file_id: str,
    now: datetime,
) -> FileItem:
    """
    Check that item is a file under folder.

    The file must have the folder's owner and a path inside the folder's
    path. Blocked and expired files are refused as well.
    """
    if (
        item is None
        or item.type != FileType.FILE
        or item.owner_id is None
        or item.owner_id != folder.owner_id
        or not is_contained(folder, item)
        or item.is_blocked
        or item.is_expired(now)
    ):
        raise FileNotInFolderError(file_id)
    return item
