"""
Files module.

Owns the per-user file tree: files, folders, content versions and public
links.

Public API:
- IFileService: Interface for owner-scoped file operations
- FileItem, FileType: Stored item model
- Files exceptions: FileItemNotFoundError, PathExistsError, etc.
"""

from .interfaces import IFileService
from .models import FileItem, FileType
from .exceptions import (
    FileItemNotFoundError,
    PathExistsError,
    SlugTakenError,
    InvalidPathError,
    NotAFileError,
)

__all__ = [
    # Interface
    "IFileService",
    # Models
    "FileItem",
    "FileType",
    # Exceptions
    "FileItemNotFoundError",
    "PathExistsError",
    "SlugTakenError",
    "InvalidPathError",
    "NotAFileError",
]
