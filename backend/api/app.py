"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.logging_config import configure_logging
from modules.admin.routes import router as admin_router
from modules.auth.routes import router as auth_router
from modules.billing.routes import router as payments_router
from modules.files.routes import router as files_router, shared_files_router
from modules.sharing.routes import router as sharing_router
from modules.users.routes import router as user_router

from .errors import register_exception_handlers
from .middleware.session import SessionGateMiddleware
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port} ({settings.environment})")
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; sign-in will fail")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Notes and file sharing API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )

    register_exception_handlers(app)

    # Session gate runs inside CORS so rejected requests still carry CORS headers
    app.add_middleware(SessionGateMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(user_router, prefix="/api/user", tags=["user"])
    app.include_router(files_router, prefix="/api/files", tags=["files"])
    app.include_router(shared_files_router, prefix="/api/shared-files", tags=["files"])
    app.include_router(sharing_router, prefix="/api", tags=["sharing"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(payments_router, prefix="/api/payments", tags=["payments"])

    return app


# Application instance for uvicorn
app = create_app()
