"""
Account API endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_user_service
from api.middleware.auth import clear_session_cookie, get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IUserService
from .models import (
    ChangePasswordRequest,
    MessageResponse,
    UpdateProfileRequest,
    UserSummary,
)

router = APIRouter()


@router.put("/profile", response_model=UserSummary)
async def update_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserSummary:
    return UserSummary.from_user(await service.update_profile(user.id, request))


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    await service.change_password(user.id, request)
    return MessageResponse(message="Password updated successfully")


@router.delete("/delete", response_model=MessageResponse)
async def delete_account(
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    """
    Delete the caller's account and every file it owns.

    Signs the caller out.
    """
    await service.delete_account(user.id)
    clear_session_cookie(response)
    return MessageResponse(message="Account deleted successfully")
