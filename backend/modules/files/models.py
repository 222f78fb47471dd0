"""
Files module data models.

A FileItem is either a file (with content) or a folder (a path prefix for
its descendants). Content edits are also recorded as FileContentVersion
rows so the editor can show history.
"""

import hashlib
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, StrictBool

from shared.models import ApiModel


class FileType(str, Enum):
    """Kind of file tree item."""

    FILE = "file"
    FOLDER = "folder"


def content_metrics(content: str) -> tuple[int, str]:
    """UTF-8 byte size and SHA-256 hex digest of some content."""
    data = content.encode("utf-8")
    return len(data), hashlib.sha256(data).hexdigest()


class FileItem(ApiModel):
    """A stored file or folder."""

    id: str
    name: str
    type: FileType
    content: str = ""
    language: str = "plaintext"
    size: int = 0
    owner_id: Optional[str] = Field(None, description="None for anonymous uploads")
    path: str
    is_public: bool = False
    is_blocked: bool = False
    share_code: Optional[str] = None
    slug: Optional[str] = None
    access_count: int = 0
    report_count: int = 0
    expires_at: Optional[datetime] = None
    is_pinned: bool = False
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @property
    def is_folder(self) -> bool:
        return self.type == FileType.FOLDER

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now


class FileSummary(ApiModel):
    """A file tree entry without its content."""

    id: str
    name: str
    type: FileType
    language: str
    size: int
    path: str
    is_public: bool
    is_pinned: bool
    share_code: Optional[str] = None
    slug: Optional[str] = None
    access_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: FileItem) -> "FileSummary":
        return cls(
            id=item.id,
            name=item.name,
            type=item.type,
            language=item.language,
            size=item.size,
            path=item.path,
            is_public=item.is_public,
            is_pinned=item.is_pinned,
            share_code=item.share_code,
            slug=item.slug,
            access_count=item.access_count,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class FileContentVersion(ApiModel):
    """One recorded version of a file's content."""

    id: str
    file_id: str
    content: str
    version: int = Field(..., ge=1)
    encoding: str = "utf-8"
    size: int
    checksum: str = Field(..., description="SHA-256 of the UTF-8 content")
    is_compressed: bool = False
    created_at: datetime


class VersionSummary(ApiModel):
    """A content version without the content itself."""

    version: int
    size: int
    checksum: str
    created_at: datetime


# =============================================================================
# Requests
# =============================================================================


class CreateFileRequest(ApiModel):
    """Request to create a file or folder at a full path."""

    name: Optional[str] = None
    type: Optional[str] = None
    path: Optional[str] = None
    content: str = ""


class UpdateContentRequest(ApiModel):
    content: str


class PinRequest(ApiModel):
    """Pin toggle. Only real JSON booleans are accepted."""

    is_pinned: StrictBool


class ShareRequest(ApiModel):
    slug: Optional[str] = Field(None, description="Optional human readable link name")


# =============================================================================
# Responses
# =============================================================================


class PinResponse(ApiModel):
    id: str
    is_pinned: bool


class ShareResponse(ApiModel):
    """Result of sharing an item."""

    id: str
    share_code: str
    slug: Optional[str] = None
    is_public: bool = True


class DeleteResponse(ApiModel):
    message: str
    deleted_count: int
