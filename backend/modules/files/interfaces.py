"""
Files module interface.

The API layer depends on IFileService for every operation on a user's own
file tree.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import CreateFileRequest, FileItem, ShareResponse, VersionSummary


@runtime_checkable
class IFileService(Protocol):
    """
    Interface for owner-scoped file operations.

    Every method takes the caller's user id and treats items owned by
    someone else exactly like missing ones (FileItemNotFoundError).
    """

    async def list_files(self, owner_id: str, path: str) -> list[FileItem]:
        """List the direct children of a path, folders first then by name."""
        ...

    async def create_item(self, owner_id: str, request: CreateFileRequest) -> FileItem:
        """
        Create a file or folder.

        Raises:
            ValidationError: Missing name/type/path or unknown type
            PathExistsError: The owner already has an item at that path
        """
        ...

    async def get_item(self, owner_id: str, file_id: str) -> FileItem:
        ...

    async def update_content(self, owner_id: str, file_id: str, content: str) -> FileItem:
        """Replace a file's content and record a content version."""
        ...

    async def list_versions(self, owner_id: str, file_id: str) -> list[VersionSummary]:
        ...

    async def delete_item(self, owner_id: str, file_id: str) -> int:
        """Delete an item (and a folder's descendants); returns rows removed."""
        ...

    async def set_pinned(self, owner_id: str, file_id: str, is_pinned: bool) -> FileItem:
        ...

    async def share(self, owner_id: str, file_id: str, slug: Optional[str] = None) -> ShareResponse:
        """
        Publish an item through a share code and optional slug.

        Raises:
            SlugTakenError: Another item already uses the slug
        """
        ...

    async def unshare(self, owner_id: str, file_id: str) -> FileItem:
        """Revoke an item's public link. Repeating it changes nothing."""
        ...

    async def list_shared(self, owner_id: str) -> list[FileItem]:
        ...
