"""
File tree API endpoints.

Every route acts on the caller's own items; a foreign id answers 404 just
like a missing one.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_file_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IFileService
from .models import (
    CreateFileRequest,
    DeleteResponse,
    FileItem,
    FileSummary,
    PinRequest,
    PinResponse,
    ShareRequest,
    ShareResponse,
    UpdateContentRequest,
    VersionSummary,
)

router = APIRouter()
shared_files_router = APIRouter()


@router.get("", response_model=list[FileSummary])
async def list_files(
    path: str = Query(default="/", description="Folder to list"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> list[FileSummary]:
    """List the direct children of a folder, folders first."""
    items = await service.list_files(user.id, path)
    return [FileSummary.from_item(item) for item in items]


@router.post("", response_model=FileItem)
async def create_file(
    request: CreateFileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> FileItem:
    return await service.create_item(user.id, request)


@router.get("/{file_id}", response_model=FileItem)
async def get_file(
    file_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> FileItem:
    return await service.get_item(user.id, file_id)


@router.put("/{file_id}", response_model=FileItem)
async def update_file(
    file_id: str,
    request: UpdateContentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> FileItem:
    """
    Replace a file's content.

    A change is recorded as a new content version; only the most recent
    versions are kept.
    """
    return await service.update_content(user.id, file_id, request.content)


@router.get("/{file_id}/versions", response_model=list[VersionSummary])
async def list_versions(
    file_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> list[VersionSummary]:
    return await service.list_versions(user.id, file_id)


@router.delete("/{file_id}", response_model=DeleteResponse)
async def delete_file(
    file_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> DeleteResponse:
    """Delete a file, or a folder with everything inside it."""
    deleted = await service.delete_item(user.id, file_id)
    return DeleteResponse(message="Deleted successfully", deleted_count=deleted)


@router.patch("/{file_id}/pin", response_model=PinResponse)
async def pin_file(
    file_id: str,
    request: PinRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> PinResponse:
    item = await service.set_pinned(user.id, file_id, request.is_pinned)
    return PinResponse(id=item.id, is_pinned=item.is_pinned)


@router.post("/{file_id}/share", response_model=ShareResponse)
async def share_file(
    file_id: str,
    request: Optional[ShareRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> ShareResponse:
    """
    Publish a file or folder.

    Keeps an existing share code; a slug gives the item a readable link.
    """
    slug = request.slug if request else None
    return await service.share(user.id, file_id, slug)


@router.post("/{file_id}/unshare", response_model=FileSummary)
async def unshare_file(
    file_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> FileSummary:
    """Revoke the public link. Safe to repeat."""
    return FileSummary.from_item(await service.unshare(user.id, file_id))


@shared_files_router.get("", response_model=list[FileSummary])
async def list_shared_files(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IFileService = Depends(get_file_service),
) -> list[FileSummary]:
    """The caller's items that currently have a public link."""
    return [FileSummary.from_item(item) for item in await service.list_shared(user.id)]
