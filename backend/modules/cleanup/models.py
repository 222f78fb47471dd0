"""
Cleanup module data models.
"""

from shared.models import ApiModel


class SweepReport(ApiModel):
    """What one cleanup sweep removed."""

    users_reaped: int = 0
    files_removed: int = 0
    expired_files_removed: int = 0
    sessions_removed: int = 0
