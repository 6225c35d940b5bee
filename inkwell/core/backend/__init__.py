"""
Access layer for the backend-as-a-service.

Structure:
- client.py: the shared Supabase client handle and its FastAPI dependency
- repositories/: per-table data access and remote error translation
- storage.py: bucket uploads, public URLs and object path rules
- realtime.py: insert subscriptions on a table
"""

from .client import (
    SessionClientFactory,
    close_backend,
    create_backend_client,
    create_session_client,
    get_backend_client,
    get_session_client_factory,
    init_backend,
)
from .repositories import BackendRepos, build_repos
from .storage import FileStorage

__all__ = [
    "BackendRepos",
    "FileStorage",
    "SessionClientFactory",
    "build_repos",
    "close_backend",
    "create_backend_client",
    "create_session_client",
    "get_backend_client",
    "get_session_client_factory",
    "init_backend",
]
