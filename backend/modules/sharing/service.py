"""
Sharing service implementation.

Public reads go through the checks in policy.py; access counters are
bumped after a successful read and a failed bump never fails the read.
"""

import logging
from datetime import timedelta
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.repository import utcnow
from modules.files.languages import language_for
from modules.files.models import FileItem, FileType, content_metrics
from modules.files.paths import ROOT, child_prefix, join_path, normalize_path
from modules.files.repository import FileRepository, sort_tree_entries
from modules.files.service import new_share_code

from .exceptions import InvalidExpiryError
from .interfaces import ISharingService
from .models import (
    AnonymousUploadRequest,
    ExploreItem,
    FolderEntry,
    SharedFolderFile,
    SharedFolderListing,
)
from .policy import require_file_in_folder, require_servable, require_shared_folder

logger = logging.getLogger(__name__)

ANONYMOUS_PATH = "/anonymous"
EXPLORE_SORTS = ("recent", "popular", "name")
MAX_EXPLORE_LIMIT = 100


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_EXPLORE_LIMIT))


class SharingService(ISharingService):
    """Implementation of the sharing service."""

    def __init__(self, files: FileRepository, settings: Optional[Settings] = None):
        self._files = files
        self._settings = settings or get_settings()

    async def open_by_code(self, share_code: str) -> FileItem:
        item = require_servable(self._files.get_by_share_code(share_code), utcnow())
        self._count_access(item)
        return item

    async def open_by_slug(self, slug: str) -> FileItem:
        item = require_servable(self._files.get_by_slug(slug.lower()), utcnow())
        self._count_access(item)
        return item

    async def list_shared_folder(self, folder_id: str, sub_path: str) -> SharedFolderListing:
        now = utcnow()
        folder = require_shared_folder(self._files.get_by_id(folder_id), folder_id, now)

        relative = normalize_path(sub_path or ROOT)
        target = join_path(folder.path, relative)

        children = [
            item for item in self._files.list_children(folder.owner_id, target)
            if not item.is_blocked and not item.is_expired(now)
        ]
        root_prefix = child_prefix(folder.path)
        return SharedFolderListing(
            folder_id=folder.id,
            folder_name=folder.name,
            path=relative,
            items=[
                FolderEntry(
                    id=item.id,
                    name=item.name,
                    type=item.type,
                    language=item.language,
                    size=item.size,
                    path="/" + item.path[len(root_prefix):],
                    updated_at=item.updated_at,
                )
                for item in sort_tree_entries(children)
            ],
        )

    async def read_shared_folder_file(self, folder_id: str, file_id: str) -> SharedFolderFile:
        now = utcnow()
        folder = require_shared_folder(self._files.get_by_id(folder_id), folder_id, now)
        item = require_file_in_folder(folder, self._files.get_by_id(file_id), file_id, now)
        self._count_access(folder)
        return SharedFolderFile(
            id=item.id,
            name=item.name,
            content=item.content,
            language=item.language,
            size=item.size,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    async def explore(self, sort: str, limit: int) -> list[ExploreItem]:
        if sort not in EXPLORE_SORTS:
            sort = "recent"
        rows = self._files.list_explorable(sort, clamp_limit(limit))
        now = utcnow()
        return [
            ExploreItem(
                id=item.id,
                name=item.name,
                type=item.type,
                language=item.language,
                slug=item.slug,
                share_code=item.share_code,
                access_count=item.access_count,
                owner_name=(owner or {}).get("name") or (owner or {}).get("username"),
                created_at=item.created_at,
            )
            for item, owner in rows
            if not item.is_expired(now)
        ]

    async def create_anonymous(self, request: AnonymousUploadRequest) -> FileItem:
        if not request.name or request.content is None:
            raise ValidationError("Name and content are required", code="MISSING_FIELDS")

        expiry_hours = request.expiry_hours
        if expiry_hours is None:
            expiry_hours = self._settings.anonymous_default_expiry_hours
        if expiry_hours < 0:
            raise InvalidExpiryError(expiry_hours)
        expires_at = utcnow() + timedelta(hours=expiry_hours) if expiry_hours > 0 else None

        size, _ = content_metrics(request.content)
        item = self._files.create({
            "name": request.name.strip(),
            "type": FileType.FILE.value,
            "path": ANONYMOUS_PATH,
            "content": request.content,
            "language": request.language or language_for(request.name),
            "size": size,
            "owner_id": None,
            "is_public": True,
            "share_code": new_share_code(),
            "expires_at": expires_at.isoformat() if expires_at else None,
        })
        logger.info(f"Anonymous upload {item.id} (expires: {expires_at or 'never'})")
        return item

    def _count_access(self, item: FileItem) -> None:
        try:
            self._files.increment_access_count(item)
        except Exception as e:
            logger.warning(f"Failed to bump access count for {item.id}: {e}")
