"""API tests for the like endpoints."""

import pytest

pytestmark = pytest.mark.asyncio


def _auth(session):
    return {"Authorization": f"Bearer {session.token}"}


@pytest.fixture
def book_id(world):
    (book,) = world.backend.seed("books", {"author_id": world.author.uid, "title": "Novel"})
    return book["id"]


async def test_toggle_and_read_state(client, world, book_id):
    toggled = await client.post(f"/api/v1/likes/book/{book_id}/toggle", headers=_auth(world.reader))

    assert toggled.status_code == 200
    assert toggled.json() == {"content_type": "book", "content_id": book_id, "liked": True, "likes_count": 1}

    mine = await client.get(f"/api/v1/likes/book/{book_id}", headers=_auth(world.reader))
    anonymous = await client.get(f"/api/v1/likes/book/{book_id}")

    assert mine.json()["liked"] is True
    assert anonymous.json() == {"content_type": "book", "content_id": book_id, "liked": False, "likes_count": 1}


async def test_anonymous_toggle(client, world, book_id):
    response = await client.post(f"/api/v1/likes/book/{book_id}/toggle")

    assert response.status_code == 401
    assert response.json()["detail"] == "Sign in to rate content"


async def test_unknown_content_type(client, world, book_id):
    response = await client.get(f"/api/v1/likes/podcast/{book_id}")

    assert response.status_code == 422


async def test_failed_toggle_carries_recovered_count(client, world, book_id):
    world.backend.fail("likes", "insert")

    response = await client.post(f"/api/v1/likes/book/{book_id}/toggle", headers=_auth(world.reader))

    assert response.status_code == 502
    assert response.json()["details"] == {"liked": None, "likes_count": 0}
