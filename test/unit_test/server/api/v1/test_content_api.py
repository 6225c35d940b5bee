"""API tests for the post, book and media endpoints."""

import pytest

pytestmark = pytest.mark.asyncio


def _auth(session):
    return {"Authorization": f"Bearer {session.token}"}


class TestPostsApi:
    async def test_publish_read_edit_delete(self, client, world):
        created = await client.post(
            "/api/v1/posts", json={"title": "Hello", "content": "x" * 2500}, headers=_auth(world.author)
        )
        assert created.status_code == 201
        post_id = created.json()["id"]

        view = await client.get(f"/api/v1/posts/{post_id}")
        assert view.json()["reading_time"] == 3
        assert view.json()["author_name"] == "Anna Writer"

        edited = await client.patch(f"/api/v1/posts/{post_id}", json={"title": "Hi"}, headers=_auth(world.author))
        assert edited.json()["title"] == "Hi"

        deleted = await client.delete(f"/api/v1/posts/{post_id}", headers=_auth(world.author))
        assert deleted.status_code == 200
        assert (await client.get(f"/api/v1/posts/{post_id}")).status_code == 404

    async def test_readers_cannot_publish(self, client, world):
        response = await client.post(
            "/api/v1/posts", json={"title": "Hello", "content": "World"}, headers=_auth(world.reader)
        )

        assert response.status_code == 403

    async def test_other_author_cannot_edit(self, client, world):
        created = await client.post(
            "/api/v1/posts", json={"title": "Hello", "content": "World"}, headers=_auth(world.author)
        )

        response = await client.patch(
            f"/api/v1/posts/{created.json()['id']}", json={"title": "Mine"}, headers=_auth(world.other_author)
        )

        assert response.status_code == 403

    async def test_edit_cannot_null_the_title(self, client, world):
        created = await client.post(
            "/api/v1/posts", json={"title": "Hello", "content": "World"}, headers=_auth(world.author)
        )
        post_id = created.json()["id"]

        response = await client.patch(f"/api/v1/posts/{post_id}", json={"title": None}, headers=_auth(world.author))

        assert response.status_code == 422
        assert response.json()["error_type"] == "ValidationError"
        assert (await client.get(f"/api/v1/posts/{post_id}")).json()["title"] == "Hello"

    async def test_list_filters(self, client, world):
        for title in ("one", "two"):
            await client.post("/api/v1/posts", json={"title": title, "content": "text"}, headers=_auth(world.author))

        newest = await client.get("/api/v1/posts", params={"filter": "new"})
        most_liked = await client.get("/api/v1/posts", params={"filter": "mostLiked"})
        invalid = await client.get("/api/v1/posts", params={"filter": "random"})

        assert [p["title"] for p in newest.json()] == ["two", "one"]
        assert most_liked.json() == []
        assert invalid.status_code == 422

    async def test_poster_upload(self, client, world):
        response = await client.post(
            "/api/v1/posts/poster",
            files={"file": ("poster.png", b"png", "image/png")},
            headers=_auth(world.author),
        )

        assert response.status_code == 200
        assert "/posts/" in response.json()["url"]


class TestBooksApi:
    async def test_upload_then_publish(self, client, world):
        uploaded = await client.post(
            "/api/v1/books/file",
            files={"file": ("My Book.pdf", b"%PDF", "application/pdf")},
            headers=_auth(world.author),
        )
        file_url = uploaded.json()["url"]
        assert file_url.endswith("-My_Book.pdf")

        created = await client.post(
            "/api/v1/books",
            json={"title": "My Book", "file_url": file_url, "is_paid": True, "price": 4.99},
            headers=_auth(world.author),
        )

        assert created.status_code == 201
        assert created.json()["price"] == 4.99
        assert (await client.get(f"/api/v1/books/{created.json()['id']}")).json()["file_url"] == file_url

    async def test_publish_without_file(self, client, world):
        response = await client.post("/api/v1/books", json={"title": "My Book"}, headers=_auth(world.author))

        assert response.status_code == 422

    async def test_cover_must_be_image(self, client, world):
        response = await client.post(
            "/api/v1/books/cover",
            files={"file": ("cover.txt", b"text", "text/plain")},
            headers=_auth(world.author),
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Only images can be uploaded as a cover"


class TestMediaApi:
    async def test_publish_and_list(self, client, world):
        created = await client.post(
            "/api/v1/media",
            json={"title": "Talk", "youtube_url": "https://youtu.be/abc"},
            headers=_auth(world.author),
        )

        listed = await client.get("/api/v1/media", params={"author_id": world.author.uid})

        assert created.status_code == 201
        assert [m["title"] for m in listed.json()] == ["Talk"]
        assert listed.json()[0]["media_type"] == "video"

    async def test_cover_upload(self, client, world):
        response = await client.post(
            "/api/v1/media/cover",
            files={"file": ("cover.jpg", b"jpg", "image/jpeg")},
            headers=_auth(world.author),
        )

        assert "/media/" in response.json()["url"]

    async def test_delete_missing(self, client, world):
        assert (await client.delete("/api/v1/media/missing", headers=_auth(world.author))).status_code == 404
