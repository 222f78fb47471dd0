"""
Edge session gate.

Lets anonymous routes through and otherwise requires a `token` cookie that
is structurally a JWT. This is only a fast-path rejection: the signature
and expiry are verified when the route builds its AuthContext.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from modules.auth.tokens import has_token_shape

from .auth import TOKEN_COOKIE

PUBLIC_PREFIXES = (
    "/api/auth/",
    "/api/anonymous/",
    "/api/share/",
    "/api/shared-folder/",
    "/api/explore",
    "/api/payments/webhook",
    "/api/health",
    "/api/ready",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


def is_public_path(path: str) -> bool:
    return path.startswith(PUBLIC_PREFIXES)


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Reject requests to protected routes that carry no plausible token."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or is_public_path(request.url.path):
            return await call_next(request)

        token = request.cookies.get(TOKEN_COOKIE)
        if not token:
            error = MissingTokenError()
            return JSONResponse(status_code=error.status_code, content=error.to_dict())

        if not has_token_shape(token):
            error = InvalidTokenError("Invalid token format")
            response = JSONResponse(status_code=error.status_code, content=error.to_dict())
            response.delete_cookie(TOKEN_COOKIE)
            return response

        return await call_next(request)
