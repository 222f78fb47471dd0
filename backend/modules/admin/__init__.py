"""
Admin module.

Moderation of files and administration of accounts, behind the admin role.
"""

from .interfaces import IAdminService
from .exceptions import ProtectedAccountError, EmptyUpdateError

__all__ = ["IAdminService", "ProtectedAccountError", "EmptyUpdateError"]
