"""
Sharing module interface.

Everything reachable without an account: public links, shared folders,
the explore page and anonymous uploads.
"""

from typing import Protocol, runtime_checkable

from modules.files.models import FileItem

from .models import (
    AnonymousUploadRequest,
    ExploreItem,
    SharedFolderFile,
    SharedFolderListing,
)


@runtime_checkable
class ISharingService(Protocol):
    """
    Interface for public access to shared items.

    Anything that is not servable is reported as NotFound.
    """

    async def open_by_code(self, share_code: str) -> FileItem:
        """Resolve a share code and count the visit."""
        ...

    async def open_by_slug(self, slug: str) -> FileItem:
        ...

    async def list_shared_folder(self, folder_id: str, sub_path: str) -> SharedFolderListing:
        """
        List the direct children of a path inside a shared folder.

        Raises:
            FolderNotSharedError: The folder is not publicly shared
            InvalidPathError: sub_path contains `..` or `.` segments
        """
        ...

    async def read_shared_folder_file(self, folder_id: str, file_id: str) -> SharedFolderFile:
        """
        Read one file through a shared folder.

        Raises:
            FolderNotSharedError: The folder is not publicly shared
            FileNotInFolderError: The file is not below the folder
        """
        ...

    async def explore(self, sort: str, limit: int) -> list[ExploreItem]:
        ...

    async def create_anonymous(self, request: AnonymousUploadRequest) -> FileItem:
        """Store an ownerless public file with an optional expiry."""
        ...
