"""
Path helpers for the file tree.

Items carry their full path ("/notes/todo.md"); there are no parent
pointers. A path is inside a folder when it starts with the folder's path
followed by a separator, so "/docs2/a" is not inside "/docs".
"""

import re

from .exceptions import InvalidPathError

ROOT = "/"
_SLASHES = re.compile(r"/{2,}")


def normalize_path(path: str) -> str:
    """
    Canonicalize a client supplied path.

    Collapses repeated slashes, drops a trailing slash and rejects relative
    paths and `.`/`..` segments.
    """
    if not path or not path.startswith("/"):
        raise InvalidPathError(path)
    path = _SLASHES.sub("/", path)
    if path != ROOT:
        path = path.rstrip("/")
    if any(segment in (".", "..") for segment in path.split("/")):
        raise InvalidPathError(path)
    return path


def join_path(parent: str, child: str) -> str:
    """Join a folder path and a relative sub-path."""
    if child in ("", ROOT):
        return parent
    return normalize_path(f"{parent.rstrip('/')}/{child.lstrip('/')}")


def child_prefix(folder_path: str) -> str:
    """The prefix every descendant of folder_path starts with."""
    return folder_path.rstrip("/") + "/"


def is_within(folder_path: str, path: str) -> bool:
    """Whether path is a strict descendant of folder_path."""
    prefix = child_prefix(folder_path)
    return path.startswith(prefix) and len(path) > len(prefix)


def is_direct_child(folder_path: str, path: str) -> bool:
    """Whether path sits exactly one level below folder_path."""
    if not is_within(folder_path, path):
        return False
    return "/" not in path[len(child_prefix(folder_path)):]
