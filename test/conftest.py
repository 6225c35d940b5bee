from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import httpx
import pytest

# Load dotenv files early so test fixtures can read settings via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except Exception:
    pass

from inkwell.core.backend.repositories import BackendRepos, build_repos
from inkwell.core.models.domain import Role, SessionUser
from test.fakes import FakeSupabaseClient

AUTHOR_ROLE_ID = 1
READER_ROLE_ID = 2


@dataclass
class World:
    """A seeded fake backend with two authors and a reader, all signed in."""

    backend: FakeSupabaseClient
    author: SessionUser
    other_author: SessionUser
    reader: SessionUser


def add_account(
    backend: FakeSupabaseClient,
    name: str,
    role: Role,
    email: str | None = None,
    avatar_url: str | None = None,
) -> SessionUser:
    """Seed a ``users`` row (and an ``authors`` row for authors) and issue a token."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    role_id = AUTHOR_ROLE_ID if role == Role.author else READER_ROLE_ID
    (user,) = backend.seed(
        "users",
        {"email": email, "full_name": name, "role_id": role_id, "avatar_url": avatar_url},
    )
    if role == Role.author:
        backend.seed(
            "authors",
            {
                "id": user["id"],
                "author_name": name,
                "bio": "",
                "avatar_url": avatar_url or "",
                "banner_url": "",
                "achievements": [],
            },
        )
    token = backend.auth.issue_token(user["id"], email)
    return SessionUser(uid=user["id"], name=name, role=role, token=token, email=email, avatar_url=avatar_url)


@pytest.fixture
def fake_backend() -> FakeSupabaseClient:
    backend = FakeSupabaseClient()
    backend.seed("roles", {"id": AUTHOR_ROLE_ID, "name": "author"}, {"id": READER_ROLE_ID, "name": "reader"})
    return backend


@pytest.fixture
def repos(fake_backend: FakeSupabaseClient) -> BackendRepos:
    return build_repos(fake_backend)


@pytest.fixture
def world(fake_backend: FakeSupabaseClient) -> World:
    return World(
        backend=fake_backend,
        author=add_account(fake_backend, "Anna Writer", Role.author),
        other_author=add_account(fake_backend, "Boris Poet", Role.author),
        reader=add_account(fake_backend, "Rita Reader", Role.reader),
    )


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)
