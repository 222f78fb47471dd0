"""
Session token issuing and verification.

Tokens are HS256 JWTs carrying the user ID in `sub` and a fixed expiry.
`has_token_shape` is the cheap structural check the edge middleware uses;
`TokenService.verify` is the full cryptographic check.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from shared.config import Settings, get_settings

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import JWTPayload


def has_token_shape(token: Optional[str]) -> bool:
    """Whether a token has the three dot-separated segments of a JWT."""
    if not token:
        return False
    parts = token.split(".")
    return len(parts) == 3 and all(parts)


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def ttl(self) -> timedelta:
        return timedelta(days=self._settings.token_ttl_days)

    def issue(self, user_id: str) -> str:
        """
        Issue a token for a user.

        Args:
            user_id: The user's ID

        Returns:
            Encoded JWT valid for `token_ttl_days`
        """
        if not self._settings.jwt_secret:
            raise RuntimeError("JWT_SECRET is not configured")

        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(
            payload,
            self._settings.jwt_secret,
            algorithm=self._settings.jwt_algorithm,
        )

    def verify(self, token: Optional[str]) -> str:
        """
        Verify a token and return the user ID it carries.

        Raises:
            MissingTokenError: If token is empty
            InvalidTokenError: If token is malformed, tampered or unsigned
            ExpiredTokenError: If token has expired
        """
        if not token:
            raise MissingTokenError()

        if not has_token_shape(token):
            raise InvalidTokenError("Invalid token format")

        if not self._settings.jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        return JWTPayload(**payload).sub
