"""
Users module data models.

The stored User record carries the password hash and reset token, so it is
never returned to clients directly; routes answer with UserSummary or
AdminUserView instead.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from shared.models import ApiModel, AuthenticatedUser


class Plan(str, Enum):
    """Subscription plans."""

    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class Role(str, Enum):
    """User roles. Only ADMIN unlocks the admin panel."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


class PaymentRecord(ApiModel):
    """One entry of a user's payment history."""

    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    plan_id: Optional[str] = None
    amount: int = Field(default=0, description="Amount in the smallest currency unit")
    currency: str = "INR"
    status: str = "captured"
    error_code: Optional[str] = None
    error_description: Optional[str] = None
    created_at: datetime


class User(ApiModel):
    """A stored user account."""

    id: str
    username: str
    email: Optional[str] = None
    name: Optional[str] = None
    password_hash: str
    plan: Plan = Plan.FREE
    role: Role = Role.USER
    is_blocked: bool = False
    pending_deletion: bool = False
    avatar: Optional[str] = None
    payment_history: list[PaymentRecord] = Field(default_factory=list)
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    def to_principal(self) -> AuthenticatedUser:
        """Project the stored record onto the per-request principal."""
        return AuthenticatedUser(
            id=self.id,
            email=self.email,
            username=self.username,
            name=self.name,
            role=self.role.value,
            plan=self.plan.value,
        )


class UserSummary(ApiModel):
    """Public view of the caller's own account."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    username: str
    plan: Plan
    role: Role = Role.USER
    avatar: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            username=user.username,
            plan=user.plan,
            role=user.role,
            avatar=user.avatar,
        )


class AdminUserView(ApiModel):
    """A user as listed in the admin panel."""

    id: str
    name: Optional[str] = None
    username: str
    email: Optional[str] = None
    plan: Plan
    role: Role
    is_blocked: bool
    files_count: int = 0
    created_at: datetime


class UpdateProfileRequest(ApiModel):
    """Request to change display name and email."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)


class ChangePasswordRequest(ApiModel):
    """Request to change the caller's password."""

    current_password: str = Field(..., min_length=1, description="Current password is required")
    new_password: str = Field(..., min_length=6, description="New password must be at least 6 characters long")


class MessageResponse(ApiModel):
    """Generic acknowledgement."""

    message: str
    success: bool = True
