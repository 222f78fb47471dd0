"""
Cleanup module.

Mark-then-reap deletion of accounts and periodic sweeps of expired data.
"""

from .interfaces import ICleanupService
from .models import SweepReport

__all__ = ["ICleanupService", "SweepReport"]
