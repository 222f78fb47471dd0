"""
Authentication service implementation.

Handles registration, login, session token verification and the password
reset flow on top of the user repository.
"""

import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from shared.config import Settings, get_settings
from shared.exceptions import ConflictError, ExternalServiceError, ValidationError
from shared.mailer import Mailer, password_reset_email
from shared.models import AuthenticatedUser
from modules.users.exceptions import EmailTakenError, UserNotFoundError
from modules.users.models import User
from modules.users.repository import UserRepository

from .exceptions import (
    InvalidCredentialsError,
    InvalidResetTokenError,
    UserBlockedError,
)
from .interfaces import IAuthService
from .models import RegisterRequest
from .passwords import hash_password, verify_password
from .tokens import TokenService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
USERNAME_PATTERN = re.compile(r"^[a-z0-9_]{3,30}$")


def derive_username(email: str) -> str:
    """Turn an email local part into a valid username candidate."""
    local = email.split("@", 1)[0].lower()
    candidate = re.sub(r"[^a-z0-9_]", "_", local)[:30]
    if len(candidate) < 3:
        candidate = (candidate + "_user")[:30]
    return candidate


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Passwords are bcrypt hashes; sessions are signed tokens issued by
    TokenService and stored client-side in the `token` cookie.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: Optional[TokenService] = None,
        mailer: Optional[Mailer] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._users = users
        self._tokens = tokens or TokenService(self._settings)
        self._mailer = mailer or Mailer(self._settings)

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """Create an account and sign it in."""
        if not request.name or not request.email or not request.password:
            raise ValidationError("Name, email, and password are required", code="MISSING_FIELDS")

        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "Password must be at least 6 characters long",
                code="PASSWORD_TOO_SHORT",
            )

        email = request.email.strip().lower()
        if self._users.get_by_email(email) is not None:
            raise EmailTakenError()

        username = self._pick_username(request.username, email)

        user = self._users.create({
            "name": request.name.strip(),
            "email": email,
            "username": username,
            "password_hash": hash_password(request.password),
        })
        logger.info(f"Registered user {user.id}")
        return user, self._tokens.issue(user.id)

    async def login(self, email: Optional[str], password: Optional[str]) -> tuple[User, str]:
        """Check credentials and issue a session token."""
        if not email or not password:
            raise ValidationError("Email and password are required", code="MISSING_FIELDS")

        user = self._users.get_by_email(email)
        if user is None or user.pending_deletion or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentialsError()

        if user.is_blocked:
            raise UserBlockedError()

        return user, self._tokens.issue(user.id)

    async def authenticate(self, token: Optional[str]) -> AuthenticatedUser:
        """Verify a session token and load the principal it names."""
        user_id = self._tokens.verify(token)
        user = self._users.get_by_id(user_id)
        if user is None or user.pending_deletion:
            raise UserNotFoundError(user_id)
        if user.is_blocked:
            raise UserBlockedError()
        return user.to_principal()

    async def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    # -------------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------------

    async def request_password_reset(self, email: Optional[str]) -> None:
        """
        Store a reset token and mail a reset link.

        Unknown emails return normally so the response never reveals which
        addresses have accounts.
        """
        if not email or "@" not in email:
            raise ValidationError("Invalid email address", code="INVALID_EMAIL")

        user = self._users.get_by_email(email)
        if user is None:
            return

        ttl = self._settings.password_reset_ttl_minutes
        token = secrets.token_hex(32)
        expiry = datetime.now(timezone.utc) + timedelta(minutes=ttl)
        self._users.update(user.id, {
            "reset_token": token,
            "reset_token_expiry": expiry.isoformat(),
        })

        reset_url = f"{self._settings.app_url}/auth/reset-password?token={token}"
        subject, html = password_reset_email(reset_url, user.username, ttl)
        try:
            await self._mailer.send(user.email or email, subject, html)
        except ExternalServiceError as e:
            logger.warning(f"Password reset mail for user {user.id} not delivered: {e.message}")

    async def verify_reset_token(self, token: Optional[str]) -> None:
        self._live_reset_holder(token)

    async def reset_password(self, token: Optional[str], password: Optional[str]) -> None:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "Password must be at least 6 characters",
                code="PASSWORD_TOO_SHORT",
            )
        user = self._live_reset_holder(token)
        self._users.update(user.id, {
            "password_hash": hash_password(password),
            "reset_token": None,
            "reset_token_expiry": None,
        })
        logger.info(f"Password reset for user {user.id}")

    def _live_reset_holder(self, token: Optional[str]) -> User:
        if not token:
            raise InvalidResetTokenError()
        user = self._users.get_by_reset_token(token)
        if user is None or user.reset_token_expiry is None:
            raise InvalidResetTokenError()
        if user.reset_token_expiry <= datetime.now(timezone.utc):
            raise InvalidResetTokenError()
        return user

    def _pick_username(self, requested: Optional[str], email: str) -> str:
        if requested:
            username = requested.strip().lower()
            if not USERNAME_PATTERN.match(username):
                raise ValidationError(
                    "Username must be 3-30 letters, digits or underscores",
                    code="INVALID_USERNAME",
                )
            if self._users.get_by_username(username) is not None:
                raise ConflictError("Username is already taken", code="USERNAME_TAKEN")
            return username

        base = derive_username(email)
        username = base
        while self._users.get_by_username(username) is not None:
            username = f"{base[:25]}_{secrets.randbelow(10000):04d}"
        return username
