"""
Authentication API endpoints.

Login and registration set the `token` cookie; logout clears it.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_auth_service
from api.middleware.auth import clear_session_cookie, get_current_user, set_session_cookie
from shared.models import AuthenticatedUser
from modules.users.models import MessageResponse, UserSummary

from .interfaces import IAuthService
from .models import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenValidationResponse,
    VerifyResetTokenRequest,
)

router = APIRouter()

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, we've sent a password reset link."
)


@router.post("/register", response_model=UserSummary)
async def register(
    request: RegisterRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> UserSummary:
    """Create an account and sign it in."""
    user, token = await service.register(request)
    set_session_cookie(response, token)
    return UserSummary.from_user(user)


@router.post("/login", response_model=UserSummary)
async def login(
    request: LoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
) -> UserSummary:
    """
    Sign in with email and password.

    Sets an HTTP-only `token` cookie valid for seven days.
    """
    user, token = await service.login(request.email, request.password)
    set_session_cookie(response, token)
    return UserSummary.from_user(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserSummary)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserSummary:
    """Get the signed-in user's summary."""
    return UserSummary.from_user(await service.get_user(user.id))


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Mail a password reset link. The answer is the same for unknown emails."""
    await service.request_password_reset(request.email)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/verify-reset-token", response_model=TokenValidationResponse)
async def verify_reset_token(
    request: VerifyResetTokenRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenValidationResponse:
    await service.verify_reset_token(request.token)
    return TokenValidationResponse(valid=True)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await service.reset_password(request.token, request.password)
    return MessageResponse(message="Password reset successfully")
