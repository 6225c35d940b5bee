"""
Backend Client Handle.

This module owns the single shared Supabase async client. It is created once
during application startup and handed to endpoints through dependency injection.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from inkwell.core.errors import BackendUnavailableError
from inkwell.core.logging_config import get_logger
from inkwell.server.core.config import Settings, settings

logger = get_logger(__name__)

"""
_client:
    The global Supabase AsyncClient instance, or None before startup.
"""
_client: Optional[AsyncClient] = None

SessionClientFactory = Callable[[], Awaitable[AsyncClient]]


async def create_backend_client(config: Settings) -> AsyncClient:
    """
    Build a Supabase async client from settings.

    Sessions are never persisted or refreshed by this handle: the server acts
    with its service key and resolves end-user sessions per request.

    Args:
        config: Application settings carrying the project URL and key

    Returns:
        AsyncClient: A ready-to-use client handle
    """
    supabase_config = config.supabase
    if not supabase_config.key:
        raise BackendUnavailableError("SUPABASE_KEY is not configured")

    options = AsyncClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=supabase_config.postgrest_timeout,
        storage_client_timeout=supabase_config.storage_timeout,
    )
    return await acreate_client(supabase_config.url, supabase_config.key, options=options)


async def init_backend() -> AsyncClient:
    """Create the global client handle if it does not exist yet."""
    global _client
    if _client is None:
        _client = await create_backend_client(settings)
        logger.info(f"Backend client created for {settings.supabase_url}")
    return _client


async def close_backend() -> None:
    """Drop realtime channels and forget the global client handle."""
    global _client
    if _client is None:
        return
    try:
        await _client.remove_all_channels()
    except Exception as e:
        logger.warning(f"Failed to close realtime channels: {e}")
    _client = None
    logger.info("Backend client closed")


def get_backend_client() -> AsyncClient:
    """
    Dependency returning the shared client handle.

    Raises:
        BackendUnavailableError: If startup did not create the client
    """
    if _client is None:
        raise BackendUnavailableError("Backend client is not initialized")
    return _client


async def create_session_client() -> AsyncClient:
    """
    Build a throwaway client for password sign-up and sign-in.

    A successful sign-in rebinds the signing-in client's ``Authorization``
    header to the user's access token, so these flows must never run on the
    shared handle.
    """
    return await create_backend_client(settings)


def get_session_client_factory() -> SessionClientFactory:
    """Dependency returning the factory of throwaway auth clients."""
    return create_session_client
