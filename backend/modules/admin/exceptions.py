"""
Admin module exceptions.
"""

from shared.exceptions import AuthorizationError, ValidationError


class ProtectedAccountError(AuthorizationError):
    """Raised when an admin action targets an admin account or the acting admin."""

    def __init__(self, user_id: str, action: str):
        super().__init__(
            "Cannot perform this action on an admin account",
            code="PROTECTED_ACCOUNT",
            details={"user_id": user_id, "action": action},
        )


class EmptyUpdateError(ValidationError):
    def __init__(self):
        super().__init__("Nothing to update", code="EMPTY_UPDATE")
