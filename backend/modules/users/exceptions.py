"""
Users module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user record does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class EmailTakenError(ConflictError):
    """Raised when an email already belongs to another account."""

    def __init__(self):
        super().__init__("Email is already taken", code="EMAIL_TAKEN")


class IncorrectPasswordError(ValidationError):
    """Raised when the current password does not match."""

    def __init__(self):
        super().__init__("Current password is incorrect", code="INCORRECT_PASSWORD")


class PasswordUnchangedError(ValidationError):
    """Raised when the new password equals the current one."""

    def __init__(self):
        super().__init__(
            "New password must be different from current password",
            code="PASSWORD_UNCHANGED",
        )


class InvalidPlanError(ValidationError):
    """Raised when a plan is outside the enumerated set."""

    def __init__(self, plan: object):
        super().__init__(
            "Invalid plan. Must be free, premium, or enterprise",
            code="INVALID_PLAN",
            details={"plan": str(plan)},
        )


class InvalidRoleError(ValidationError):
    """Raised when a role is outside the enumerated set."""

    def __init__(self, role: object):
        super().__init__(
            "Invalid role. Must be user, moderator, or admin",
            code="INVALID_ROLE",
            details={"role": str(role)},
        )
