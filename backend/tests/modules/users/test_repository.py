"""Tests for the user repository."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

from modules.users.models import Plan
from modules.users.repository import UserRepository
from tests.conftest import rejecting_db

USER_ID = "9d1c6f2a-3b7e-4c58-a0d4-5e8f7b2c1a90"


def create_mock_db(rows: list[dict]):
    query = MagicMock()
    for method in ("select", "eq", "neq", "order", "update", "delete", "insert"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=rows)
    db = MagicMock()
    db.table.return_value = query
    return db, query


def create_mock_user_data(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": USER_ID,
        "username": "ada",
        "email": "ada@example.com",
        "name": "Ada",
        "password_hash": "hash",
        "plan": "premium",
        "role": "user",
        "created_at": now,
        "updated_at": now,
        **overrides,
    }


class TestUserRepository:
    def test_get_by_id_hides_pending_deletion(self):
        db, query = create_mock_db([create_mock_user_data()])

        user = UserRepository(db).get_by_id(USER_ID)

        db.table.assert_called_with("users")
        query.eq.assert_any_call("id", USER_ID)
        query.eq.assert_any_call("pending_deletion", False)
        assert user.plan == Plan.PREMIUM
        assert user.payment_history == []

    def test_update_missing_user(self):
        db, _ = create_mock_db([])
        assert UserRepository(db).update(USER_ID, {"plan": "free"}) is None

    def test_malformed_id_never_reaches_the_database(self):
        db = rejecting_db()
        repo = UserRepository(db)

        assert repo.get_by_id("bogus") is None
        assert repo.update("bogus", {"plan": "premium"}) is None
        assert repo.delete("bogus") is False
        assert repo.mark_pending_deletion("bogus") is False
        db.table.assert_not_called()
