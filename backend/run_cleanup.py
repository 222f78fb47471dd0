#!/usr/bin/env python
"""
Run one cleanup sweep.

Reaps accounts left pending deletion, expired anonymous files and expired
sessions. Safe to run repeatedly, e.g. from cron.

Usage:
    python run_cleanup.py
"""

import asyncio
import logging
import sys

from api.dependencies import get_cleanup_service
from shared.config import get_settings
from shared.logging_config import configure_logging

logger = logging.getLogger("run_cleanup")


async def sweep() -> int:
    report = await get_cleanup_service().sweep()
    logger.info(report.model_dump_json())
    return 0


def main() -> int:
    configure_logging(get_settings().log_level)
    try:
        return asyncio.run(sweep())
    except Exception:
        logger.exception("Cleanup sweep failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
