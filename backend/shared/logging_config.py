"""
Logging setup.

Modules log through `logging.getLogger(__name__)`; this only configures the
root handler once at application startup.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging. Safe to call more than once."""
    global _configured
    if _configured:
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO, which includes gateway URLs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True
