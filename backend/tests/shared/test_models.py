"""Tests for shared/models.py."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from shared.models import ApiModel, AuthContext, AuthenticatedUser


class Sample(ApiModel):
    share_code: str
    is_pinned: bool = False


class TestApiModel:
    def test_serializes_camel_case(self):
        assert Sample(share_code="abc").model_dump(by_alias=True) == {
            "shareCode": "abc",
            "isPinned": False,
        }

    def test_accepts_both_spellings(self):
        assert Sample.model_validate({"shareCode": "a"}).share_code == "a"
        assert Sample.model_validate({"share_code": "b"}).share_code == "b"


class TestAuthContext:
    def test_anonymous(self):
        context = AuthContext()
        assert context.is_anonymous
        assert context.user_id is None

    def test_authenticated(self):
        user = AuthenticatedUser(id="u1", username="alice")
        context = AuthContext(user=user)
        assert not context.is_anonymous
        assert context.user_id == "u1"
        assert user.role == "user"
        assert user.plan == "free"

    def test_principal_is_immutable(self):
        user = AuthenticatedUser(id="u1", username="alice")
        with pytest.raises(PydanticValidationError):
            user.role = "admin"
