"""
Session service implementation.
"""

import logging
import secrets
from datetime import timedelta
from typing import Any, Optional

from shared.config import Settings, get_settings
from shared.repository import utcnow
from .interfaces import ISessionService
from .models import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionService(ISessionService):
    """Sliding-expiry sessions stored in the `sessions` table."""

    def __init__(self, sessions: SessionRepository, settings: Optional[Settings] = None):
        self._sessions = sessions
        self._settings = settings or get_settings()

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self._settings.session_ttl_hours)

    async def resolve(self, session_id: Optional[str], user_id: Optional[str] = None) -> Session:
        if session_id:
            session = self._sessions.get(session_id)
            if session is not None:
                return session
        return self._sessions.create(secrets.token_hex(32), utcnow() + self.ttl, user_id)

    async def record(self, session: Session, updates: dict[str, Any]) -> Session:
        data = {**session.data, **updates}
        touched = self._sessions.touch(session.session_id, data, utcnow() + self.ttl)
        return touched or session

    async def reap_expired(self) -> int:
        removed = self._sessions.delete_expired(utcnow())
        if removed:
            logger.info(f"Removed {removed} expired session(s)")
        return removed
