"""
Sharing module.

Public access to shared items and the authorization policy every module
uses (see policy.py).
"""

from .interfaces import ISharingService
from .exceptions import (
    SharedItemNotFoundError,
    FolderNotSharedError,
    FileNotInFolderError,
    InvalidExpiryError,
)

__all__ = [
    "ISharingService",
    "SharedItemNotFoundError",
    "FolderNotSharedError",
    "FileNotInFolderError",
    "InvalidExpiryError",
]
