"""
Admin API endpoints.

Every route requires the admin role.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_admin_service
from api.middleware.auth import get_admin_user
from shared.models import AuthenticatedUser
from modules.users.models import AdminUserView, MessageResponse, UserSummary

from .interfaces import IAdminService
from .models import (
    AdminFileContent,
    AdminFileView,
    DeleteFilesResponse,
    SetPlanRequest,
    SetRoleRequest,
    UpdateFileRequest,
)

router = APIRouter()


@router.get("/users", response_model=list[AdminUserView])
async def list_users(
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> list[AdminUserView]:
    """All users with the number of files each owns."""
    return await service.list_users(admin)


@router.get("/files", response_model=list[AdminFileView])
async def list_files(
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> list[AdminFileView]:
    return await service.list_files(admin)


@router.get("/shares", response_model=list[AdminFileView])
async def list_shares(
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> list[AdminFileView]:
    return await service.list_shares(admin)


@router.get("/files/{file_id}/content", response_model=AdminFileContent)
async def get_file_content(
    file_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminFileContent:
    item = await service.get_file(admin, file_id)
    return AdminFileContent(
        id=item.id,
        name=item.name,
        content=item.content,
        language=item.language,
        size=item.size,
    )


@router.patch("/files/{file_id}", response_model=AdminFileView)
async def update_file(
    file_id: str,
    request: UpdateFileRequest,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminFileView:
    return AdminFileView.from_item(await service.update_file(admin, file_id, request))


@router.post("/files/{file_id}/block", response_model=AdminFileView)
async def block_file(
    file_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminFileView:
    """Hide an item from every public route."""
    return AdminFileView.from_item(await service.set_file_blocked(admin, file_id, True))


@router.post("/files/{file_id}/unblock", response_model=AdminFileView)
async def unblock_file(
    file_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> AdminFileView:
    return AdminFileView.from_item(await service.set_file_blocked(admin, file_id, False))


@router.delete("/files/{file_id}", response_model=DeleteFilesResponse)
async def delete_file(
    file_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> DeleteFilesResponse:
    removed = await service.delete_file(admin, file_id)
    return DeleteFilesResponse(message="File deleted successfully", deleted_count=removed)


@router.delete("/users/{user_id}/delete-files", response_model=DeleteFilesResponse)
async def delete_user_files(
    user_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> DeleteFilesResponse:
    """Delete every file a user owns. Admin accounts are protected."""
    target, removed = await service.delete_all_files_for_user(admin, user_id)
    return DeleteFilesResponse(
        message=f"Deleted {removed} file(s)",
        deleted_count=removed,
        user=UserSummary.from_user(target),
    )


@router.patch("/users/{user_id}/plan", response_model=UserSummary)
async def set_user_plan(
    user_id: str,
    request: SetPlanRequest,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    return UserSummary.from_user(await service.set_user_plan(admin, user_id, request.plan))


@router.patch("/users/{user_id}/role", response_model=UserSummary)
async def set_user_role(
    user_id: str,
    request: SetRoleRequest,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    return UserSummary.from_user(await service.set_user_role(admin, user_id, request.role))


@router.post("/users/{user_id}/block", response_model=MessageResponse)
async def block_user(
    user_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> MessageResponse:
    await service.set_user_blocked(admin, user_id, True)
    return MessageResponse(message="User blocked")


@router.post("/users/{user_id}/unblock", response_model=MessageResponse)
async def unblock_user(
    user_id: str,
    admin: AuthenticatedUser = Depends(get_admin_user),
    service: IAdminService = Depends(get_admin_service),
) -> MessageResponse:
    await service.set_user_blocked(admin, user_id, False)
    return MessageResponse(message="User unblocked")
