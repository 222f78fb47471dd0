"""
File repositories for database access.

Encapsulates all Supabase queries against the `files` and `file_contents`
tables. Owner-scoped methods filter on id and owner in a single query so a
foreign item is indistinguishable from a missing one.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository, escape_like, is_uuid, utcnow
from .models import FileContentVersion, FileItem, FileType, content_metrics
from .paths import child_prefix, is_direct_child

OWNER_EMBED = "owner:users(name, username, email)"


class FileRepository(BaseRepository[FileItem]):
    """
    Repository for file and folder data access.

    Note: This repository does NOT perform authorization checks.
    The service layer decides who may see or change an item.
    """

    table_name = "files"

    # -------------------------------------------------------------------------
    # Single item lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, file_id: str) -> Optional[FileItem]:
        if not is_uuid(file_id):
            return None
        result = self._table().select("*").eq("id", file_id).execute()
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def get_owned(self, file_id: str, owner_id: str) -> Optional[FileItem]:
        """Get an item only if owner_id owns it."""
        if not is_uuid(file_id):
            return None
        result = (
            self._table()
            .select("*")
            .eq("id", file_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def get_by_share_code(self, share_code: str) -> Optional[FileItem]:
        result = self._table().select("*").eq("share_code", share_code).execute()
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def get_by_slug(self, slug: str) -> Optional[FileItem]:
        result = self._table().select("*").eq("slug", slug).execute()
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def path_exists(self, owner_id: str, path: str) -> bool:
        result = (
            self._table()
            .select("id")
            .eq("owner_id", owner_id)
            .eq("path", path)
            .execute()
        )
        return bool(result.data)

    def slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self._table().select("id").eq("slug", slug)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.execute().data)

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def list_descendants(self, owner_id: str, folder_path: str) -> list[FileItem]:
        """All items of owner_id strictly below folder_path."""
        result = (
            self._table()
            .select("*")
            .eq("owner_id", owner_id)
            .like("path", escape_like(child_prefix(folder_path)) + "%")
            .execute()
        )
        return [self._map_to_file(row) for row in result.data]

    def list_children(self, owner_id: str, folder_path: str) -> list[FileItem]:
        """
        Direct children of folder_path, folders first then by name.
        """
        items = [
            item for item in self.list_descendants(owner_id, folder_path)
            if is_direct_child(folder_path, item.path)
        ]
        return sort_tree_entries(items)

    def list_shared(self, owner_id: str) -> list[FileItem]:
        """The owner's shared, unblocked items, most recently updated first."""
        result = (
            self._table()
            .select("*")
            .eq("owner_id", owner_id)
            .eq("is_public", True)
            .eq("is_blocked", False)
            .not_.is_("share_code", "null")
            .order("updated_at", desc=True)
            .execute()
        )
        return [self._map_to_file(row) for row in result.data]

    def list_explorable(self, sort: str, limit: int) -> list[tuple[FileItem, Optional[dict]]]:
        """
        Public, unblocked, slugged, owned items with their owner.

        Args:
            sort: "recent", "popular" or "name".
            limit: Maximum number of rows.
        """
        query = (
            self._table()
            .select(f"*, {OWNER_EMBED}")
            .eq("is_public", True)
            .eq("is_blocked", False)
            .not_.is_("slug", "null")
            .not_.is_("owner_id", "null")
        )
        if sort == "popular":
            query = query.order("access_count", desc=True)
        elif sort == "name":
            query = query.order("name")
        else:
            query = query.order("created_at", desc=True)
        result = query.limit(limit).execute()
        return [(self._map_to_file(row), row.get("owner")) for row in result.data]

    def list_recent(self, limit: int, public_only: bool = False) -> list[tuple[FileItem, Optional[dict]]]:
        """Latest items with their owner, for the admin panel."""
        query = self._table().select(f"*, {OWNER_EMBED}")
        if public_only:
            query = query.eq("is_public", True).not_.is_("share_code", "null")
        result = query.order("created_at", desc=True).limit(limit).execute()
        return [(self._map_to_file(row), row.get("owner")) for row in result.data]

    def list_ids_by_owner(self, owner_id: str) -> list[str]:
        result = self._table().select("id").eq("owner_id", owner_id).execute()
        return [str(row["id"]) for row in result.data]

    def list_expired_ids(self, now: datetime) -> list[str]:
        result = (
            self._table()
            .select("id")
            .not_.is_("expires_at", "null")
            .lte("expires_at", now.isoformat())
            .execute()
        )
        return [str(row["id"]) for row in result.data]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> FileItem:
        """
        Insert a file or folder.

        Args:
            data: Column values (name, type, path, owner_id, content, ...)

        Returns:
            Created FileItem with generated ID and timestamps.
        """
        now = utcnow().isoformat()
        row = {"created_at": now, "updated_at": now, **data}
        result = self._table().insert(row).execute()
        return self._map_to_file(result.data[0])

    def update(self, file_id: str, data: dict[str, Any]) -> Optional[FileItem]:
        if not is_uuid(file_id):
            return None
        row = {**data, "updated_at": utcnow().isoformat()}
        result = self._table().update(row).eq("id", file_id).execute()
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def update_owned(
        self,
        file_id: str,
        owner_id: str,
        data: dict[str, Any],
    ) -> Optional[FileItem]:
        """Update an item only if owner_id owns it; None otherwise."""
        if not is_uuid(file_id):
            return None
        row = {**data, "updated_at": utcnow().isoformat()}
        result = (
            self._table()
            .update(row)
            .eq("id", file_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def increment_access_count(self, item: FileItem) -> None:
        """
        Bump access_count from the value read with item.

        Read-modify-write without locking: concurrent reads may lose
        increments.
        """
        self._table().update(
            {"access_count": item.access_count + 1}
        ).eq("id", item.id).execute()

    def delete_owned(self, file_id: str, owner_id: str) -> Optional[FileItem]:
        """Delete an item owned by owner_id; returns it, or None if absent."""
        if not is_uuid(file_id):
            return None
        result = (
            self._table()
            .delete()
            .eq("id", file_id)
            .eq("owner_id", owner_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_file(result.data[0])

    def delete_many(self, file_ids: list[str]) -> int:
        """Delete items by id; returns how many rows were actually removed."""
        if not file_ids:
            return 0
        result = self._table().delete().in_("id", file_ids).execute()
        return len(result.data)

    def delete_by_owner(self, owner_id: str) -> int:
        result = self._table().delete().eq("owner_id", owner_id).execute()
        return len(result.data)

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_file(self, data: dict[str, Any]) -> FileItem:
        """Map database row to FileItem model."""
        owner_id = data.get("owner_id")
        return FileItem(
            id=str(data["id"]),
            name=data["name"],
            type=FileType(data["type"]),
            content=data.get("content") or "",
            language=data.get("language") or "plaintext",
            size=data.get("size") or 0,
            owner_id=str(owner_id) if owner_id else None,
            path=data["path"],
            is_public=data.get("is_public", False),
            is_blocked=data.get("is_blocked", False),
            share_code=data.get("share_code"),
            slug=data.get("slug"),
            access_count=data.get("access_count") or 0,
            report_count=data.get("report_count") or 0,
            expires_at=data.get("expires_at"),
            is_pinned=data.get("is_pinned", False),
            tags=data.get("tags") or [],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class FileContentRepository(BaseRepository[FileContentVersion]):
    """
    Repository for recorded content versions.

    Version numbers only grow; pruning old versions never frees a number
    for reuse.
    """

    table_name = "file_contents"

    def latest_version(self, file_id: str) -> int:
        """Highest recorded version number, 0 when none."""
        result = (
            self._table()
            .select("version")
            .eq("file_id", file_id)
            .order("version", desc=True)
            .limit(1)
            .execute()
        )
        if not result.data:
            return 0
        return int(result.data[0]["version"])

    def add_version(self, file_id: str, content: str, version: int) -> FileContentVersion:
        size, checksum = content_metrics(content)
        now = utcnow().isoformat()
        result = self._table().insert({
            "file_id": file_id,
            "content": content,
            "version": version,
            "encoding": "utf-8",
            "size": size,
            "checksum": checksum,
            "is_compressed": False,
            "created_at": now,
            "updated_at": now,
        }).execute()
        return self._map_to_version(result.data[0])

    def list_versions(self, file_id: str) -> list[FileContentVersion]:
        """Versions of a file, newest first."""
        result = (
            self._table()
            .select("*")
            .eq("file_id", file_id)
            .order("version", desc=True)
            .execute()
        )
        return [self._map_to_version(row) for row in result.data]

    def prune(self, file_id: str, keep: int) -> int:
        """Drop all but the newest `keep` versions. Returns rows removed."""
        stale = [v.version for v in self.list_versions(file_id)[keep:]]
        if not stale:
            return 0
        result = (
            self._table()
            .delete()
            .eq("file_id", file_id)
            .in_("version", stale)
            .execute()
        )
        return len(result.data)

    def delete_for_files(self, file_ids: list[str]) -> int:
        if not file_ids:
            return 0
        result = self._table().delete().in_("file_id", file_ids).execute()
        return len(result.data)

    def _map_to_version(self, data: dict[str, Any]) -> FileContentVersion:
        return FileContentVersion(
            id=str(data["id"]),
            file_id=str(data["file_id"]),
            content=data.get("content") or "",
            version=data["version"],
            encoding=data.get("encoding") or "utf-8",
            size=data.get("size") or 0,
            checksum=data["checksum"],
            is_compressed=data.get("is_compressed", False),
            created_at=data["created_at"],
        )


def sort_tree_entries(items: list[FileItem]) -> list[FileItem]:
    """Folders first, then by name."""
    return sorted(items, key=lambda item: (item.type != FileType.FOLDER, item.name.lower()))
