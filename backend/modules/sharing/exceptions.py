"""
Sharing module exceptions.

Every refusal to serve a shared item is a NotFound, so a blocked or
unshared item looks exactly like one that never existed.
"""

from shared.exceptions import NotFoundError, ValidationError


class SharedItemNotFoundError(NotFoundError):
    """Raised when a share code or slug does not resolve to a servable item."""

    def __init__(self, message: str = "File not found or not accessible"):
        super().__init__(message, code="SHARED_ITEM_NOT_FOUND")


class FolderNotSharedError(NotFoundError):
    """Raised when a folder is missing, unshared, blocked or not a folder."""

    def __init__(self, folder_id: str):
        super().__init__(
            "Folder not found or not shared",
            code="FOLDER_NOT_SHARED",
            details={"folder_id": folder_id},
        )


class FileNotInFolderError(NotFoundError):
    """Raised when a file is not part of the shared folder it was asked through."""

    def __init__(self, file_id: str):
        super().__init__(
            "File not found in shared folder",
            code="FILE_NOT_IN_FOLDER",
            details={"file_id": file_id},
        )


class InvalidExpiryError(ValidationError):
    def __init__(self, hours: int):
        super().__init__(
            "Expiry hours must be zero or positive",
            code="INVALID_EXPIRY",
            details={"expiry_hours": hours},
        )
