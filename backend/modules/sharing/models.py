"""
Sharing module data models.

Public views never include the owner's id or other private columns.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.models import ApiModel
from modules.files.models import FileItem, FileType


class SharedItemView(ApiModel):
    """A file or folder as seen through a public link."""

    id: str
    name: str
    type: FileType
    content: str = ""
    language: str
    size: int
    share_code: Optional[str] = None
    slug: Optional[str] = None
    access_count: int = 0
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: FileItem) -> "SharedItemView":
        return cls(
            id=item.id,
            name=item.name,
            type=item.type,
            content=item.content,
            language=item.language,
            size=item.size,
            share_code=item.share_code,
            slug=item.slug,
            access_count=item.access_count,
            expires_at=item.expires_at,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class SharedFolderFile(ApiModel):
    """A file read through a shared folder."""

    id: str
    name: str
    content: str
    language: str
    size: int
    created_at: datetime
    updated_at: datetime


class FolderEntry(ApiModel):
    """A child of a shared folder, with its path relative to the folder."""

    id: str
    name: str
    type: FileType
    language: str
    size: int
    path: str
    updated_at: datetime


class SharedFolderListing(ApiModel):
    folder_id: str
    folder_name: str
    path: str
    items: list[FolderEntry]


class ExploreItem(ApiModel):
    """A published item on the explore page."""

    id: str
    name: str
    type: FileType
    language: str
    slug: str
    share_code: Optional[str] = None
    access_count: int
    owner_name: Optional[str] = None
    created_at: datetime


class AnonymousUploadRequest(ApiModel):
    """Paste-style upload without an account."""

    name: Optional[str] = None
    content: Optional[str] = None
    language: Optional[str] = None
    expiry_hours: Optional[int] = Field(
        None,
        description="Hours until the file expires; 0 keeps it forever, omitted uses the default",
    )


class AnonymousUploadResponse(ApiModel):
    id: str
    name: str
    share_code: str
    expires_at: Optional[datetime] = None
