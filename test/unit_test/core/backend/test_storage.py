"""Unit tests for storage path rules, cover validation and uploads."""

import re

import pytest

from inkwell.core.backend.storage import (
    FileStorage,
    author_avatar_path,
    book_file_path,
    cover_path,
    file_extension,
    poster_path,
    sanitize_file_name,
    user_avatar_path,
    validate_cover_image,
)
from inkwell.core.errors import BackendError, ValidationError

UUID = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


class TestPathRules:
    def test_file_extension(self):
        assert file_extension("cover.final.PNG") == "PNG"
        assert file_extension("README") == "README"

    def test_sanitize_file_name(self):
        assert sanitize_file_name("My  Book (draft)!.pdf") == "My_Book_draft.pdf"
        assert sanitize_file_name("Книга.epub") == ".epub"

    def test_author_avatar_path(self):
        assert re.fullmatch(rf"a1/avatars/{UUID}\.jpg", author_avatar_path("a1", "me.jpg"))

    def test_user_avatar_path(self):
        assert re.fullmatch(rf"u1/avatar/u1-{UUID}\.png", user_avatar_path("u1", "face.png"))

    def test_poster_and_cover_paths(self):
        assert re.fullmatch(rf"a1/posters/{UUID}\.webp", poster_path("a1", "p.webp"))
        assert re.fullmatch(rf"a1/covers/{UUID}\.jpg", cover_path("a1", "c.jpg"))

    def test_book_file_path_keeps_sanitized_name(self):
        assert re.fullmatch(rf"a1/files/{UUID}-Lord_of_Rings\.pdf", book_file_path("a1", "Lord of Rings.pdf"))

    def test_paths_are_unique(self):
        assert poster_path("a1", "p.png") != poster_path("a1", "p.png")


class TestValidateCoverImage:
    def test_accepts_small_image(self):
        validate_cover_image("image/png", 1024, 5)

    @pytest.mark.parametrize("content_type", [None, "", "application/pdf", "text/plain"])
    def test_rejects_non_images(self, content_type):
        with pytest.raises(ValidationError, match="Only images"):
            validate_cover_image(content_type, 10, 5)

    def test_rejects_size_at_the_limit(self):
        with pytest.raises(ValidationError, match="smaller than 5MB"):
            validate_cover_image("image/jpeg", 5 * 1024 * 1024, 5)


@pytest.mark.asyncio
class TestFileStorage:
    async def test_upload_returns_public_url(self, fake_backend):
        url = await FileStorage(fake_backend).upload("posts", "a1/posters/x.png", b"png", content_type="image/png")

        assert url.endswith("/posts/a1/posters/x.png")
        stored = fake_backend.storage.objects[("posts", "a1/posters/x.png")]
        assert stored["options"] == {"upsert": "false", "content-type": "image/png"}

    async def test_upsert_and_cache_control_options(self, fake_backend):
        storage = FileStorage(fake_backend)
        await storage.upload("media", "a1/covers/c.png", b"1", upsert=True, cache_control="3600")
        await storage.upload("media", "a1/covers/c.png", b"2", upsert=True, cache_control="3600")

        stored = fake_backend.storage.objects[("media", "a1/covers/c.png")]
        assert stored["data"] == b"2"
        assert stored["options"]["cache-control"] == "3600"

    async def test_duplicate_without_upsert_fails(self, fake_backend):
        storage = FileStorage(fake_backend)
        await storage.upload("books", "a1/files/b.pdf", b"1")

        with pytest.raises(BackendError, match="Upload failed"):
            await storage.upload("books", "a1/files/b.pdf", b"2")

    async def test_storage_failure_is_backend_error(self, fake_backend):
        fake_backend.storage.fail_uploads = True

        with pytest.raises(BackendError):
            await FileStorage(fake_backend).upload("posts", "x.png", b"")
