"""
Sessions module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Session


@runtime_checkable
class ISessionService(Protocol):
    """Interface for visitor session bookkeeping."""

    async def resolve(self, session_id: Optional[str], user_id: Optional[str] = None) -> Session:
        """Return the live session for session_id, creating one if needed."""
        ...

    async def record(self, session: Session, updates: dict[str, Any]) -> Session:
        """Merge updates into the session data and refresh its activity."""
        ...

    async def reap_expired(self) -> int:
        ...
