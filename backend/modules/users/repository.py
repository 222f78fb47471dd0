"""
User repository for database access.

Encapsulates all Supabase queries against the `users` table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, is_uuid, utcnow
from .models import AdminUserView, PaymentRecord, Plan, User


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    Users marked `pending_deletion` are invisible to every lookup except the
    ones the cleanup sweep uses.

    Note: This repository does NOT perform authorization checks.
    """

    table_name = "users"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: str, include_pending: bool = False) -> Optional[User]:
        """Get a user by ID, or None if absent."""
        if not is_uuid(user_id):
            return None
        query = self._table().select("*").eq("id", user_id)
        if not include_pending:
            query = query.eq("pending_deletion", False)
        result = query.execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive), or None."""
        result = (
            self._table()
            .select("*")
            .eq("email", email.strip().lower())
            .eq("pending_deletion", False)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_username(self, username: str) -> Optional[User]:
        result = self._table().select("*").eq("username", username.lower()).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_reset_token(self, token: str) -> Optional[User]:
        """Get the user holding a reset token. Expiry is checked by the caller."""
        result = (
            self._table()
            .select("*")
            .eq("reset_token", token)
            .eq("pending_deletion", False)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def email_taken_by_other(self, email: str, user_id: str) -> bool:
        """Whether an email belongs to an account other than user_id."""
        result = (
            self._table()
            .select("id")
            .eq("email", email.strip().lower())
            .neq("id", user_id)
            .execute()
        )
        return bool(result.data)

    def list_with_file_counts(self) -> list[AdminUserView]:
        """All users, newest first, each with the number of files it owns."""
        result = (
            self._table()
            .select("*, files(count)")
            .eq("pending_deletion", False)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_admin_view(row) for row in result.data]

    def list_pending_deletion(self) -> list[str]:
        """IDs of users marked for deletion but not reaped yet."""
        result = self._table().select("id").eq("pending_deletion", True).execute()
        return [str(row["id"]) for row in result.data]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user record.

        Args:
            data: Column values (username, email, name, password_hash, ...)

        Returns:
            Created User with generated ID and timestamps.
        """
        now = utcnow().isoformat()
        row = {"created_at": now, "updated_at": now, **data}
        result = self._table().insert(row).execute()
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        """Update columns of a user; returns the new record or None if absent."""
        if not is_uuid(user_id):
            return None
        row = {**data, "updated_at": utcnow().isoformat()}
        result = self._table().update(row).eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def append_payment(
        self,
        user_id: str,
        record: PaymentRecord,
        plan: Optional[Plan] = None,
    ) -> Optional[User]:
        """
        Append a payment-history entry and optionally change the plan.

        Appending is not idempotent: the same order/payment pair recorded
        twice yields two entries.
        """
        user = self.get_by_id(user_id)
        if user is None:
            return None
        history = [p.model_dump(mode="json") for p in user.payment_history]
        history.append(record.model_dump(mode="json"))
        data: dict[str, Any] = {"payment_history": history}
        if plan is not None:
            data["plan"] = plan.value
        return self.update(user_id, data)

    def mark_pending_deletion(self, user_id: str) -> bool:
        """Flag a user for deletion. Returns False if the user is absent."""
        return self.update(user_id, {"pending_deletion": True}) is not None

    def delete(self, user_id: str) -> bool:
        """Delete a user row. Returns whether a row was removed."""
        if not is_uuid(user_id):
            return False
        result = self._table().delete().eq("id", user_id).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            username=data["username"],
            email=data.get("email"),
            name=data.get("name"),
            password_hash=data["password_hash"],
            plan=Plan(data.get("plan") or Plan.FREE.value),
            role=data.get("role") or "user",
            is_blocked=data.get("is_blocked", False),
            pending_deletion=data.get("pending_deletion", False),
            avatar=data.get("avatar"),
            payment_history=data.get("payment_history") or [],
            reset_token=data.get("reset_token"),
            reset_token_expiry=data.get("reset_token_expiry"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _map_to_admin_view(self, data: dict[str, Any]) -> AdminUserView:
        """Map a row with an embedded `files(count)` aggregate."""
        counts = data.get("files") or [{"count": 0}]
        return AdminUserView(
            id=str(data["id"]),
            name=data.get("name"),
            username=data["username"],
            email=data.get("email"),
            plan=Plan(data.get("plan") or Plan.FREE.value),
            role=data.get("role") or "user",
            is_blocked=data.get("is_blocked", False),
            files_count=counts[0].get("count", 0),
            created_at=data["created_at"],
        )
