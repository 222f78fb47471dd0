"""
Notta API package.

Provides the FastAPI application for the Notta note and file sharing service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
