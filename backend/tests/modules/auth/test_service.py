"""Tests for the authentication service."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from shared.exceptions import ConflictError, ExternalServiceError, ValidationError
from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    UserBlockedError,
)
from modules.auth.models import RegisterRequest
from modules.auth.passwords import hash_password
from modules.auth.service import AuthService, derive_username
from modules.auth.tokens import TokenService
from modules.users.exceptions import EmailTakenError, UserNotFoundError
from tests.conftest import create_test_token, make_settings, make_user


@pytest.fixture
def users():
    repo = MagicMock()
    repo.get_by_email.return_value = None
    repo.get_by_username.return_value = None
    return repo


@pytest.fixture
def mailer():
    return AsyncMock()


@pytest.fixture
def service(users, mailer) -> AuthService:
    settings = make_settings()
    return AuthService(users, tokens=TokenService(settings), mailer=mailer, settings=settings)


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_and_issues_token(self, service, users):
        users.create.return_value = make_user(id="new-user")

        with patch("modules.auth.service.hash_password", return_value="hashed") as mock_hash:
            user, token = await service.register(RegisterRequest(
                name="Alice", email="Alice@Example.com", password="secret1",
            ))

        mock_hash.assert_called_once_with("secret1")
        created = users.create.call_args.args[0]
        assert created["email"] == "alice@example.com"
        assert created["username"] == "alice"
        assert created["password_hash"] == "hashed"
        assert user.id == "new-user"
        assert TokenService(make_settings()).verify(token) == "new-user"

    @pytest.mark.asyncio
    async def test_missing_fields(self, service, users):
        with pytest.raises(ValidationError):
            await service.register(RegisterRequest(email="a@b.c", password="secret1"))
        users.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_short_password(self, service):
        with pytest.raises(ValidationError, match="at least 6"):
            await service.register(RegisterRequest(name="A", email="a@b.c", password="12345"))

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, users):
        users.get_by_email.return_value = make_user()
        with pytest.raises(EmailTakenError) as exc_info:
            await service.register(RegisterRequest(name="A", email="test@example.com", password="secret1"))
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_taken_username(self, service, users):
        users.get_by_username.return_value = make_user()
        with pytest.raises(ConflictError):
            await service.register(RegisterRequest(
                name="A", email="a@b.c", password="secret1", username="testuser",
            ))

    def test_derive_username(self):
        assert derive_username("john.doe@example.com") == "john_doe"
        assert derive_username("al@example.com") == "al_user"


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, service, users):
        users.get_by_email.return_value = make_user(password_hash=hash_password("secret1"))
        user, token = await service.login("test@example.com", "secret1")
        assert user.email == "test@example.com"
        assert token.count(".") == 2

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, users):
        users.get_by_email.return_value = make_user(password_hash=hash_password("secret1"))
        with pytest.raises(InvalidCredentialsError):
            await service.login("test@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody@example.com", "secret1")

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError):
            await service.login("test@example.com", None)

    @pytest.mark.asyncio
    async def test_blocked_user(self, service, users):
        users.get_by_email.return_value = make_user(
            password_hash=hash_password("secret1"), is_blocked=True,
        )
        with pytest.raises(UserBlockedError) as exc_info:
            await service.login("test@example.com", "secret1")
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_pending_deletion(self, service, users):
        users.get_by_email.return_value = make_user(
            password_hash=hash_password("secret1"), pending_deletion=True,
        )
        with pytest.raises(InvalidCredentialsError):
            await service.login("test@example.com", "secret1")


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_returns_principal(self, service, users):
        users.get_by_id.return_value = make_user(role="admin")
        principal = await service.authenticate(create_test_token())
        assert principal.id == "test-user-123"
        assert principal.role == "admin"

    @pytest.mark.asyncio
    async def test_user_gone(self, service, users):
        users.get_by_id.return_value = None
        with pytest.raises(UserNotFoundError) as exc_info:
            await service.authenticate(create_test_token())
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_blocked_user(self, service, users):
        users.get_by_id.return_value = make_user(is_blocked=True)
        with pytest.raises(UserBlockedError):
            await service.authenticate(create_test_token())

    @pytest.mark.asyncio
    async def test_pending_deletion_stops_authenticating(self, service, users):
        users.get_by_id.return_value = make_user(pending_deletion=True)
        with pytest.raises(UserNotFoundError):
            await service.authenticate(create_test_token())

    @pytest.mark.asyncio
    async def test_expired_token(self, service, users):
        with pytest.raises(ExpiredTokenError):
            await service.authenticate(create_test_token(expired=True))
        users.get_by_id.assert_not_called()


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_stores_token_and_mails_link(self, service, users, mailer):
        users.get_by_email.return_value = make_user()

        await service.request_password_reset("test@example.com")

        data = users.update.call_args.args[1]
        assert len(data["reset_token"]) == 64
        mailer.send.assert_awaited_once()
        to, subject, html = mailer.send.call_args.args
        assert to == "test@example.com"
        assert f"token={data['reset_token']}" in html

    @pytest.mark.asyncio
    async def test_undelivered_mail_looks_like_success(self, service, users, mailer):
        users.get_by_email.return_value = make_user()
        mailer.send.side_effect = ExternalServiceError("smtp down", service="smtp")

        await service.request_password_reset("test@example.com")

        assert users.update.call_args.args[1]["reset_token"]
        mailer.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_email_is_silent(self, service, users, mailer):
        await service.request_password_reset("nobody@example.com")
        users.update.assert_not_called()
        mailer.send.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_email(self, service):
        with pytest.raises(ValidationError):
            await service.request_password_reset("not-an-email")

    @pytest.mark.asyncio
    async def test_verify_live_token(self, service, users):
        users.get_by_reset_token.return_value = make_user(
            reset_token="t" * 64,
            reset_token_expiry=datetime.now(timezone.utc) + timedelta(minutes=30),
        )
        await service.verify_reset_token("t" * 64)

    @pytest.mark.asyncio
    async def test_verify_expired_token(self, service, users):
        users.get_by_reset_token.return_value = make_user(
            reset_token="t" * 64,
            reset_token_expiry=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
        with pytest.raises(InvalidResetTokenError):
            await service.verify_reset_token("t" * 64)

    @pytest.mark.asyncio
    async def test_reset_password_clears_token(self, service, users):
        users.get_by_reset_token.return_value = make_user(
            reset_token="t" * 64,
            reset_token_expiry=datetime.now(timezone.utc) + timedelta(minutes=30),
        )
        with patch("modules.auth.service.hash_password", return_value="new-hash"):
            await service.reset_password("t" * 64, "newsecret")

        users.update.assert_called_once_with("test-user-123", {
            "password_hash": "new-hash",
            "reset_token": None,
            "reset_token_expiry": None,
        })

    @pytest.mark.asyncio
    async def test_reset_with_unknown_token(self, service, users):
        users.get_by_reset_token.return_value = None
        with pytest.raises(InvalidResetTokenError):
            await service.reset_password("nope", "newsecret")
        users.update.assert_not_called()
