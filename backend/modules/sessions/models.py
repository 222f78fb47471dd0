"""
Sessions module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from shared.models import ApiModel


class Session(ApiModel):
    """
    A server-side visitor session.

    Anonymous visitors get one on their first upload; `data` holds small
    bits of state such as the ids of files they uploaded.
    """

    id: str
    session_id: str
    user_id: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime
    last_activity: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
