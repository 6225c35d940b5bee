from typing import AsyncGenerator
from unittest.mock import patch

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture(name="client")
async def client_fixture(world) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client over the seeded fake backend with a mocked lifespan."""
    from inkwell.core.backend import get_backend_client, get_session_client_factory
    from inkwell.server.main import app

    app.dependency_overrides[get_backend_client] = lambda: world.backend
    app.dependency_overrides[get_session_client_factory] = lambda: world.backend.session_client

    # Mock the lifespan to prevent backend client creation during tests
    async def mock_lifespan(app):
        yield

    with patch("inkwell.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()
