"""
Authentication module data models.

Request bodies keep their fields optional so that missing values are
reported with the same short messages the service uses, instead of a
generic schema error.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import ApiModel


class JWTPayload(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Subject (user ID)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class LoginRequest(ApiModel):
    """Credentials for POST /auth/login."""

    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(ApiModel):
    """Body of POST /auth/register."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None


class ForgotPasswordRequest(ApiModel):
    email: Optional[str] = None


class VerifyResetTokenRequest(ApiModel):
    token: Optional[str] = None


class ResetPasswordRequest(ApiModel):
    token: Optional[str] = None
    password: Optional[str] = None


class TokenValidationResponse(ApiModel):
    """Response from reset token validation."""

    valid: bool = Field(..., description="Whether the token is valid")
