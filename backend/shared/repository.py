"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import TypeVar, Generic
from uuid import UUID

from supabase import Client


T = TypeVar("T")


def utcnow() -> datetime:
    """Timezone-aware current time, the only clock repositories use."""
    return datetime.now(timezone.utc)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so a path prefix matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def is_uuid(value: object) -> bool:
    """Whether value is a UUID string; any other id cannot match a row."""
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally. Repositories never perform
    authorization checks; the service layer owns those.

    Example:
        class FileRepository(BaseRepository[FileItem]):
            def get_by_id(self, file_id: str) -> Optional[FileItem]:
                result = self._db.table("files").select("*").eq("id", file_id).execute()
                if not result.data:
                    return None
                return self._map_to_file(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        return self._db.table(self.table_name)
