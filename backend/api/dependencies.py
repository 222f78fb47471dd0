"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

When we're ready to extract a module to a microservice, we only need
to change the implementation here to an HTTP client.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin.interfaces import IAdminService
    from modules.auth.interfaces import IAuthService
    from modules.billing.interfaces import IBillingService
    from modules.cleanup.interfaces import ICleanupService
    from modules.files.interfaces import IFileService
    from modules.files.repository import FileContentRepository, FileRepository
    from modules.sessions.interfaces import ISessionService
    from modules.sessions.repository import SessionRepository
    from modules.sharing.interfaces import ISharingService
    from modules.users.interfaces import IUserService
    from modules.users.repository import UserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and share
    one Supabase client.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self.reset()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def file_repository(self) -> "FileRepository":
        if self._file_repository is None:
            from modules.files.repository import FileRepository
            from shared.database import get_supabase_client
            self._file_repository = FileRepository(get_supabase_client())
        return self._file_repository

    @property
    def content_repository(self) -> "FileContentRepository":
        if self._content_repository is None:
            from modules.files.repository import FileContentRepository
            from shared.database import get_supabase_client
            self._content_repository = FileContentRepository(get_supabase_client())
        return self._content_repository

    @property
    def session_repository(self) -> "SessionRepository":
        if self._session_repository is None:
            from modules.sessions.repository import SessionRepository
            from shared.database import get_supabase_client
            self._session_repository = SessionRepository(get_supabase_client())
        return self._session_repository

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.user_repository)
        return self._auth_service

    @property
    def cleanup(self) -> "ICleanupService":
        if self._cleanup_service is None:
            from modules.cleanup.service import CleanupService
            self._cleanup_service = CleanupService(
                users=self.user_repository,
                files=self.file_repository,
                contents=self.content_repository,
                sessions=self.session_repository,
            )
        return self._cleanup_service

    @property
    def users(self) -> "IUserService":
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(self.user_repository, self.cleanup)
        return self._user_service

    @property
    def files(self) -> "IFileService":
        if self._file_service is None:
            from modules.files.service import FileService
            self._file_service = FileService(self.file_repository, self.content_repository)
        return self._file_service

    @property
    def sharing(self) -> "ISharingService":
        if self._sharing_service is None:
            from modules.sharing.service import SharingService
            self._sharing_service = SharingService(self.file_repository)
        return self._sharing_service

    @property
    def sessions(self) -> "ISessionService":
        if self._session_service is None:
            from modules.sessions.service import SessionService
            self._session_service = SessionService(self.session_repository)
        return self._session_service

    @property
    def admin(self) -> "IAdminService":
        if self._admin_service is None:
            from modules.admin.service import AdminService
            self._admin_service = AdminService(
                users=self.user_repository,
                files=self.file_repository,
                contents=self.content_repository,
                cleanup=self.cleanup,
            )
        return self._admin_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.gateway import RazorpayGateway
            from modules.billing.service import BillingService
            from shared.config import get_settings
            self._billing_service = BillingService(
                self.user_repository,
                RazorpayGateway(get_settings()),
            )
        return self._billing_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository: "UserRepository | None" = None
        self._file_repository: "FileRepository | None" = None
        self._content_repository: "FileContentRepository | None" = None
        self._session_repository: "SessionRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._cleanup_service: "ICleanupService | None" = None
        self._user_service: "IUserService | None" = None
        self._file_service: "IFileService | None" = None
        self._sharing_service: "ISharingService | None" = None
        self._session_service: "ISessionService | None" = None
        self._admin_service: "IAdminService | None" = None
        self._billing_service: "IBillingService | None" = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_user_service() -> "IUserService":
    return get_container().users


def get_file_service() -> "IFileService":
    return get_container().files


def get_sharing_service() -> "ISharingService":
    return get_container().sharing


def get_session_service() -> "ISessionService":
    return get_container().sessions


def get_admin_service() -> "IAdminService":
    return get_container().admin


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_cleanup_service() -> "ICleanupService":
    return get_container().cleanup
