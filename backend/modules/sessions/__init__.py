"""
Sessions module.

Server-side sessions for visitors, mainly anonymous uploaders.
"""

from .interfaces import ISessionService
from .models import Session

__all__ = ["ISessionService", "Session"]
