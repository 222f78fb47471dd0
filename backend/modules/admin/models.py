"""
Admin module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shared.models import ApiModel
from modules.files.models import FileItem, FileType
from modules.users.models import UserSummary


class AdminFileView(ApiModel):
    """A file tree item as listed in the admin panel."""

    id: str
    name: str
    type: FileType
    language: str
    size: int
    path: str
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    is_public: bool
    is_blocked: bool
    share_code: Optional[str] = None
    slug: Optional[str] = None
    access_count: int
    report_count: int
    expires_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_item(cls, item: FileItem, owner: Optional[dict] = None) -> "AdminFileView":
        owner = owner or {}
        return cls(
            id=item.id,
            name=item.name,
            type=item.type,
            language=item.language,
            size=item.size,
            path=item.path,
            owner_id=item.owner_id,
            owner_name=owner.get("name") or owner.get("username"),
            owner_email=owner.get("email"),
            is_public=item.is_public,
            is_blocked=item.is_blocked,
            share_code=item.share_code,
            slug=item.slug,
            access_count=item.access_count,
            report_count=item.report_count,
            expires_at=item.expires_at,
            created_at=item.created_at,
        )


class AdminFileContent(ApiModel):
    id: str
    name: str
    content: str
    language: str
    size: int


class UpdateFileRequest(ApiModel):
    """Rename a file or change its language; at least one is required."""

    name: Optional[str] = None
    language: Optional[str] = None


class SetPlanRequest(ApiModel):
    plan: Optional[str] = None


class SetRoleRequest(ApiModel):
    role: Optional[str] = None


class DeleteFilesResponse(ApiModel):
    message: str
    deleted_count: int
    user: Optional[UserSummary] = Field(None, description="Whose files were deleted")
