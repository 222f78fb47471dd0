"""
Supabase client for the repositories.

Every repository shares one client built with the service role key. Row
Level Security is bypassed, so who may read or change a row is decided in
the service layer (see modules/sharing/policy.py), never here.
"""

from typing import Optional

from supabase import Client, ClientOptions, create_client

from .config import Settings, get_settings

_client: Optional[Client] = None


def client_options(settings: Settings) -> ClientOptions:
    """
    Options for a server-side client.

    No user session is ever attached, so token refresh and session
    persistence are off.
    """
    return ClientOptions(
        postgrest_client_timeout=settings.supabase_timeout_seconds,
        auto_refresh_token=False,
        persist_session=False,
    )


def get_supabase_client() -> Client:
    """
    The shared service-role client, created on first use.

    Raises:
        RuntimeError: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set
    """
    global _client
    if _client is None:
        settings = get_settings()
        missing = [
            name for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(f"Supabase configuration missing: {', '.join(missing)}")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=client_options(settings),
        )
    return _client


def reset_client_cache() -> None:
    """Forget the cached client; the next call builds a new one."""
    global _client
    _client = None
