import pytest

from inkwell.server.core.constant import VERSION

pytestmark = pytest.mark.asyncio


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client):
    response = await client.get("/version")

    assert response.json() == {"version": VERSION, "schema_version": "v1"}
