"""
Users module.

Stored accounts, plans and roles, and self-service profile management.

Public API:
- IUserService: Interface for the caller's own account
- User, Plan, Role: Account models
- User exceptions: UserNotFoundError, EmailTakenError, etc.
"""

from .interfaces import IUserService
from .models import Plan, Role, User, UserSummary
from .exceptions import (
    UserNotFoundError,
    EmailTakenError,
    IncorrectPasswordError,
    PasswordUnchangedError,
    InvalidPlanError,
    InvalidRoleError,
)

__all__ = [
    # Interface
    "IUserService",
    # Models
    "Plan",
    "Role",
    "User",
    "UserSummary",
    # Exceptions
    "UserNotFoundError",
    "EmailTakenError",
    "IncorrectPasswordError",
    "PasswordUnchangedError",
    "InvalidPlanError",
    "InvalidRoleError",
]
