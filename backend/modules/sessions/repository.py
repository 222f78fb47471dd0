"""
Session repository for database access.

Encapsulates all Supabase queries against the `sessions` table.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository, utcnow
from .models import Session


class SessionRepository(BaseRepository[Session]):
    """
    Repository for visitor sessions.

    Expired sessions are reported as absent; the cleanup sweep removes
    them for good.
    """

    table_name = "sessions"

    def get(self, session_id: str) -> Optional[Session]:
        result = self._table().select("*").eq("session_id", session_id).execute()
        if not result.data:
            return None
        session = self._map_to_session(result.data[0])
        if session.is_expired(utcnow()):
            return None
        return session

    def create(self, session_id: str, expires_at: datetime, user_id: Optional[str] = None) -> Session:
        now = utcnow().isoformat()
        result = self._table().insert({
            "session_id": session_id,
            "user_id": user_id,
            "data": {},
            "expires_at": expires_at.isoformat(),
            "last_activity": now,
            "created_at": now,
        }).execute()
        return self._map_to_session(result.data[0])

    def touch(self, session_id: str, data: dict[str, Any], expires_at: datetime) -> Optional[Session]:
        """Store data, refresh last_activity and slide the expiry."""
        result = (
            self._table()
            .update({
                "data": data,
                "last_activity": utcnow().isoformat(),
                "expires_at": expires_at.isoformat(),
            })
            .eq("session_id", session_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_session(result.data[0])

    def delete_expired(self, now: datetime) -> int:
        result = self._table().delete().lte("expires_at", now.isoformat()).execute()
        return len(result.data)

    def _map_to_session(self, data: dict[str, Any]) -> Session:
        user_id = data.get("user_id")
        return Session(
            id=str(data["id"]),
            session_id=data["session_id"],
            user_id=str(user_id) if user_id else None,
            data=data.get("data") or {},
            expires_at=data["expires_at"],
            last_activity=data.get("last_activity") or data["created_at"],
            created_at=data["created_at"],
        )
