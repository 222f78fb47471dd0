"""
Request authentication.

Builds the AuthContext for a request from the `token` cookie. FastAPI
caches dependencies per request, so the token is verified once and the
same context flows into every handler and service call.
"""

from fastapi import Depends, Request, Response

from shared.config import get_settings
from shared.exceptions import AuthenticationError, NotFoundError
from shared.models import AuthContext, AuthenticatedUser
from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.sharing.policy import require_admin

from ..dependencies import get_auth_service

TOKEN_COOKIE = "token"


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token cookie."""
    settings = get_settings()
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=60 * 60 * 24 * settings.token_ttl_days,
    )


def clear_session_cookie(response: Response) -> None:
    """Clear the session token cookie (empty value, max_age=0)."""
    settings = get_settings()
    response.set_cookie(
        TOKEN_COOKIE,
        "",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=0,
    )


async def get_auth_context(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency that resolves the request principal.

    No cookie means an anonymous context; a cookie that fails verification
    raises, so protected routes answer 401.
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        return AuthContext()
    user = await auth.authenticate(token)
    return AuthContext(user=user)


async def get_optional_auth_context(
    request: Request,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency for routes that work with or without authentication.

    A stale or invalid cookie degrades to an anonymous context.
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        return AuthContext()
    try:
        return AuthContext(user=await auth.authenticate(token))
    except (AuthenticationError, NotFoundError):
        return AuthContext()


async def get_current_user(
    context: AuthContext = Depends(get_auth_context),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if context.user is None:
        raise MissingTokenError()
    return context.user


async def get_admin_user(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires the admin role."""
    require_admin(user)
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
RequireAdmin = Depends(get_admin_user)
OptionalAuth = Depends(get_optional_auth_context)
