"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for every model that crosses the HTTP boundary.

    Fields are snake_case in Python and camelCase on the wire; input accepts
    either spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthenticatedUser(ApiModel):
    """
    Represents an authenticated user in the system.

    Built once per request from the verified token and the stored user
    record, then passed to every downstream call.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: Optional[str] = Field(None, description="User's email address")
    username: str = Field(..., description="Unique username")
    name: Optional[str] = Field(None, description="Display name")
    role: str = Field(default="user", description="User role (user, moderator, admin)")
    plan: str = Field(default="free", description="Subscription plan")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,  # Make immutable for safety
        extra="ignore",
    )


class AuthContext(BaseModel):
    """
    The principal a request executes as.

    `user` is None for anonymous visitors. Constructed exactly once per
    request by the API layer (see api/middleware/auth.py).
    """

    user: Optional[AuthenticatedUser] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_anonymous(self) -> bool:
        return self.user is None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None
