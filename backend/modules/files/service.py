"""
File service implementation.

Owner-scoped operations on a user's file tree. Every lookup filters on id
and owner together, so "missing" and "someone else's" both surface as
FileItemNotFoundError.
"""

import logging
import re
import secrets
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from .exceptions import (
    FileItemNotFoundError,
    NotAFileError,
    PathExistsError,
    SlugTakenError,
)
from .interfaces import IFileService
from .languages import language_for
from .models import (
    CreateFileRequest,
    FileItem,
    FileType,
    ShareResponse,
    VersionSummary,
    content_metrics,
)
from .paths import normalize_path
from .repository import FileContentRepository, FileRepository

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{1,62}[a-z0-9])?$")


def new_share_code() -> str:
    """A fresh unguessable share code (32 hex chars)."""
    return secrets.token_hex(16)


def normalize_slug(slug: str) -> str:
    slug = slug.strip().lower()
    if not SLUG_PATTERN.match(slug):
        raise ValidationError(
            "Link name may only contain lowercase letters, digits and dashes",
            code="INVALID_SLUG",
            details={"slug": slug},
        )
    return slug


class FileService(IFileService):
    """Implementation of the file service."""

    def __init__(
        self,
        files: FileRepository,
        contents: FileContentRepository,
        settings: Optional[Settings] = None,
    ):
        self._files = files
        self._contents = contents
        self._settings = settings or get_settings()

    async def list_files(self, owner_id: str, path: str) -> list[FileItem]:
        return self._files.list_children(owner_id, normalize_path(path or "/"))

    async def create_item(self, owner_id: str, request: CreateFileRequest) -> FileItem:
        if not request.name or not request.type or not request.path:
            raise ValidationError("Name, type, and path are required", code="MISSING_FIELDS")

        try:
            item_type = FileType(request.type)
        except ValueError:
            raise ValidationError(
                "Type must be 'file' or 'folder'",
                code="INVALID_TYPE",
                details={"type": request.type},
            )

        path = normalize_path(request.path)
        if self._files.path_exists(owner_id, path):
            raise PathExistsError(path)

        content = request.content if item_type == FileType.FILE else ""
        size, _ = content_metrics(content)
        return self._files.create({
            "name": request.name.strip(),
            "type": item_type.value,
            "path": path,
            "content": content,
            "language": language_for(request.name) if item_type == FileType.FILE else "plaintext",
            "size": size,
            "owner_id": owner_id,
        })

    async def get_item(self, owner_id: str, file_id: str) -> FileItem:
        return self._owned(owner_id, file_id)

    async def update_content(self, owner_id: str, file_id: str, content: str) -> FileItem:
        item = self._owned(owner_id, file_id)
        if item.is_folder:
            raise NotAFileError(file_id)

        size, _ = content_metrics(content)
        updated = self._files.update_owned(file_id, owner_id, {"content": content, "size": size})
        if updated is None:
            raise FileItemNotFoundError(file_id)

        if content != item.content:
            version = self._contents.latest_version(file_id) + 1
            self._contents.add_version(file_id, content, version)
            self._contents.prune(file_id, self._settings.file_versions_kept)
        return updated

    async def list_versions(self, owner_id: str, file_id: str) -> list[VersionSummary]:
        self._owned(owner_id, file_id)
        return [
            VersionSummary(
                version=v.version,
                size=v.size,
                checksum=v.checksum,
                created_at=v.created_at,
            )
            for v in self._contents.list_versions(file_id)
        ]

    async def delete_item(self, owner_id: str, file_id: str) -> int:
        """
        Delete an item and, for folders, everything below it.

        Descendants go first so an interrupted delete leaves the folder in
        place and can simply be repeated.
        """
        item = self._owned(owner_id, file_id)
        removed_ids: list[str] = []
        if item.is_folder:
            descendant_ids = [d.id for d in self._files.list_descendants(owner_id, item.path)]
            self._contents.delete_for_files(descendant_ids)
            self._files.delete_many(descendant_ids)
            removed_ids.extend(descendant_ids)

        self._contents.delete_for_files([item.id])
        if self._files.delete_owned(item.id, owner_id) is not None:
            removed_ids.append(item.id)
        logger.info(f"Deleted {len(removed_ids)} item(s) for user {owner_id}")
        return len(removed_ids)

    async def set_pinned(self, owner_id: str, file_id: str, is_pinned: bool) -> FileItem:
        updated = self._files.update_owned(file_id, owner_id, {"is_pinned": is_pinned})
        if updated is None:
            raise FileItemNotFoundError(file_id)
        return updated

    async def share(self, owner_id: str, file_id: str, slug: Optional[str] = None) -> ShareResponse:
        item = self._owned(owner_id, file_id)

        data: dict = {"is_public": True}
        share_code = item.share_code or new_share_code()
        data["share_code"] = share_code

        if slug:
            slug = normalize_slug(slug)
            if self._files.slug_taken(slug, exclude_id=item.id):
                raise SlugTakenError(slug)
            data["slug"] = slug

        updated = self._files.update_owned(file_id, owner_id, data)
        if updated is None:
            raise FileItemNotFoundError(file_id)
        return ShareResponse(
            id=updated.id,
            share_code=share_code,
            slug=updated.slug,
            is_public=True,
        )

    async def unshare(self, owner_id: str, file_id: str) -> FileItem:
        updated = self._files.update_owned(
            file_id,
            owner_id,
            {"share_code": None, "slug": None, "is_public": False},
        )
        if updated is None:
            raise FileItemNotFoundError(file_id)
        return updated

    async def list_shared(self, owner_id: str) -> list[FileItem]:
        return self._files.list_shared(owner_id)

    def _owned(self, owner_id: str, file_id: str) -> FileItem:
        item = self._files.get_owned(file_id, owner_id)
        if item is None:
            raise FileItemNotFoundError(file_id)
        return item
