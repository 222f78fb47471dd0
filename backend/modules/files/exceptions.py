"""
Files module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class FileItemNotFoundError(NotFoundError):
    """
    Raised when a file is absent or not visible to the caller.

    Owner-scoped lookups raise this for both "does not exist" and "not
    yours", so callers cannot discover other users' files.
    """

    def __init__(self, file_id: str):
        super().__init__(
            "File not found",
            code="FILE_NOT_FOUND",
            details={"file_id": file_id},
        )


class PathExistsError(ConflictError):
    """Raised when the owner already has an item at a path."""

    def __init__(self, path: str):
        super().__init__(
            "A file or folder with this name already exists",
            code="PATH_EXISTS",
            details={"path": path},
        )


class SlugTakenError(ConflictError):
    """Raised when a share slug is already in use."""

    def __init__(self, slug: str):
        super().__init__(
            "This link name is already taken",
            code="SLUG_TAKEN",
            details={"slug": slug},
        )


class InvalidPathError(ValidationError):
    """Raised for relative paths or paths with `.`/`..` segments."""

    def __init__(self, path: str):
        super().__init__(
            "Invalid path",
            code="INVALID_PATH",
            details={"path": path},
        )


class NotAFileError(ValidationError):
    """Raised when a content operation targets a folder."""

    def __init__(self, file_id: str):
        super().__init__(
            "Operation is only valid for files",
            code="NOT_A_FILE",
            details={"file_id": file_id},
        )
