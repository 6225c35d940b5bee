"""
Content Service.

Publishing, editing and listing of posts, books and videos, and the uploads
that go with them (posters, covers, book files).

Listed items are enriched with their author's name and like count; the
``popular`` and ``mostLiked`` filters are applied to the enriched list.
"""

from __future__ import annotations

import asyncio
import math
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.backend.repositories.base import Row, TableRepository
from inkwell.core.backend.storage import (
    FileStorage,
    book_file_path,
    cover_path,
    poster_path,
    validate_cover_image,
)
from inkwell.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import (
    Book,
    ContentFilter,
    ContentType,
    Media,
    MediaType,
    Post,
    PostView,
    SessionUser,
)
from inkwell.core.models.io import BookCreate, BookUpdate, MediaCreate, MediaUpdate, PostCreate, PostUpdate
from inkwell.server.core.config import Settings, settings

from .follows import require_session

logger = get_logger(__name__)

ContentT = TypeVar("ContentT", Post, Book, Media)

CHARS_PER_READING_MINUTE = 1000


def reading_time(content: str) -> int:
    """Estimated reading time in whole minutes."""
    return math.ceil(len(content or "") / CHARS_PER_READING_MINUTE)


def apply_content_filter(items: List[ContentT], content_filter: ContentFilter, popular_limit: int) -> List[ContentT]:
    """
    Order or narrow an enriched content list.

    ``all`` keeps the backend's order, ``new`` puts the newest first,
    ``popular`` keeps the ``popular_limit`` most liked and ``mostLiked`` keeps
    liked items only, most liked first.
    """
    if content_filter == ContentFilter.new:
        return sorted(items, key=lambda item: item.created_at.timestamp() if item.created_at else 0, reverse=True)
    if content_filter == ContentFilter.popular:
        return sorted(items, key=lambda item: item.likes_count, reverse=True)[:popular_limit]
    if content_filter == ContentFilter.most_liked:
        return sorted((item for item in items if item.likes_count > 0), key=lambda item: item.likes_count, reverse=True)
    return list(items)


def _paid_price(is_paid: bool, price: Optional[float]) -> float:
    return (price or 0) if is_paid else 0


def _edited_values(data: BaseModel, required: Sequence[str], non_null: Sequence[str] = ()) -> Dict[str, Any]:
    """
    The fields sent in an edit request.

    A field listed in ``required`` may be left out but not sent as null or
    blank text; a field listed in ``non_null`` may not be sent as null.

    Raises:
        ValidationError: When a column that cannot be cleared is cleared
    """
    values = data.model_dump(exclude_unset=True)
    for name in required:
        if name in values and not (values[name] or "").strip():
            raise ValidationError(f"'{name}' cannot be empty")
    for name in non_null:
        if name in values and values[name] is None:
            raise ValidationError(f"'{name}' cannot be null")
    return values


class ContentService:
    """Service layer for posts, books and videos."""

    def __init__(self, repos: BackendRepos, storage: FileStorage, config: Settings = settings) -> None:
        self.repos = repos
        self.storage = storage
        self.config = config

    # -----------------------------------------------------------------
    # Shared helpers
    # -----------------------------------------------------------------

    async def _enrich(self, rows: List[Row], content_type: ContentType, model: Type[ContentT]) -> List[ContentT]:
        if not rows:
            return []
        authors, likes = await asyncio.gather(
            self.repos.authors.select("id, author_name", in_=("id", {row["author_id"] for row in rows})),
            self.repos.likes.counts_for(content_type, [row["id"] for row in rows]),
        )
        names = {author["id"]: author.get("author_name") for author in authors}
        return [
            model.model_validate({**row, "author_name": names.get(row["author_id"]), "likes_count": likes[row["id"]]})
            for row in rows
        ]

    async def _list(
        self,
        repo: TableRepository,
        content_type: ContentType,
        model: Type[ContentT],
        search_columns: Sequence[str],
        author_id: Optional[str],
        search: Optional[str],
        content_filter: ContentFilter,
        extra_filters: Optional[Dict[str, Any]] = None,
    ) -> List[ContentT]:
        filters = dict(extra_filters or {})
        if author_id:
            filters["author_id"] = author_id
        rows = await repo.select(filters=filters, search=(search_columns, search) if search else None)
        items = await self._enrich(rows, content_type, model)
        return apply_content_filter(items, content_filter, self.config.popular_limit)

    async def _get(self, repo: TableRepository, content_type: ContentType, model: Type[ContentT], item_id: str):
        row = await repo.get(item_id)
        if row is None:
            raise NotFoundError(f"{model.__name__} not found")
        return (await self._enrich([row], content_type, model))[0]

    async def _load_owned(self, repo: TableRepository, item_id: str, session: Optional[SessionUser], label: str) -> Row:
        current = require_session(session)
        row = await repo.get(item_id, columns="id, author_id")
        if row is None:
            raise NotFoundError(f"{label} not found")
        if row["author_id"] != current.uid:
            raise PermissionDeniedError(f"Only the author can modify this {label.lower()}")
        return row

    async def _update(self, repo: TableRepository, item_id: str, values: Dict[str, Any]) -> None:
        if values:
            await repo.update(values, {"id": item_id})

    # -----------------------------------------------------------------
    # Posts
    # -----------------------------------------------------------------

    async def list_posts(
        self,
        author_id: Optional[str] = None,
        search: Optional[str] = None,
        content_filter: ContentFilter = ContentFilter.all,
    ) -> List[Post]:
        return await self._list(
            self.repos.posts, ContentType.post, Post, ("title", "content"), author_id, search, content_filter
        )

    async def get_post_view(self, post_id: str) -> PostView:
        """A single post with its author's name and avatar, like count and reading time."""
        row = await self.repos.posts.get(post_id)
        if row is None:
            raise NotFoundError("Post not found")

        author, likes_count = await asyncio.gather(
            self.repos.authors.get(row["author_id"], columns="author_name, avatar_url"),
            self.repos.likes.count_for(ContentType.post, post_id),
        )
        author = author or {}
        return PostView.model_validate(
            {
                **row,
                "author_name": author.get("author_name"),
                "author_avatar": author.get("avatar_url"),
                "likes_count": likes_count,
                "reading_time": reading_time(row.get("content") or ""),
            }
        )

    async def create_post(self, session: Optional[SessionUser], data: PostCreate) -> Post:
        current = require_session(session)
        if not data.title.strip() or not data.content.strip():
            raise ValidationError("Title and content are required")

        row = await self.repos.posts.insert(
            {
                "title": data.title,
                "content": data.content,
                "is_paid": data.is_paid,
                "poster_url": data.poster_url,
                "author_id": current.uid,
            }
        )
        logger.info(f"Author {current.uid} published post {row.get('id')}")
        return Post.model_validate({**row, "author_name": current.name})

    async def update_post(self, session: Optional[SessionUser], post_id: str, data: PostUpdate) -> Post:
        await self._load_owned(self.repos.posts, post_id, session, "Post")
        await self._update(self.repos.posts, post_id, _edited_values(data, ("title", "content")))
        return await self._get(self.repos.posts, ContentType.post, Post, post_id)

    async def delete_post(self, session: Optional[SessionUser], post_id: str) -> None:
        await self._load_owned(self.repos.posts, post_id, session, "Post")
        await self.repos.posts.delete({"id": post_id})

    # -----------------------------------------------------------------
    # Books
    # -----------------------------------------------------------------

    async def list_books(
        self,
        author_id: Optional[str] = None,
        search: Optional[str] = None,
        content_filter: ContentFilter = ContentFilter.all,
    ) -> List[Book]:
        return await self._list(
            self.repos.books, ContentType.book, Book, ("title", "description"), author_id, search, content_filter
        )

    async def get_book(self, book_id: str) -> Book:
        return await self._get(self.repos.books, ContentType.book, Book, book_id)

    async def create_book(self, session: Optional[SessionUser], data: BookCreate) -> Book:
        current = require_session(session)
        if not data.file_url:
            raise ValidationError("Upload the book file first")

        row = await self.repos.books.insert(
            {
                "title": data.title,
                "description": data.description,
                "cover_url": data.cover_url,
                "file_url": data.file_url,
                "is_paid": data.is_paid,
                "price": _paid_price(data.is_paid, data.price),
                "author_id": current.uid,
            }
        )
        logger.info(f"Author {current.uid} published book {row.get('id')}")
        return Book.model_validate({**row, "author_name": current.name})

    async def update_book(self, session: Optional[SessionUser], book_id: str, data: BookUpdate) -> Book:
        await self._load_owned(self.repos.books, book_id, session, "Book")
        values = _edited_values(data, ("title",), non_null=("is_paid",))
        values["price"] = values.get("price") or 0
        await self._update(self.repos.books, book_id, values)
        return await self.get_book(book_id)

    async def delete_book(self, session: Optional[SessionUser], book_id: str) -> None:
        await self._load_owned(self.repos.books, book_id, session, "Book")
        await self.repos.books.delete({"id": book_id})

    # -----------------------------------------------------------------
    # Media (videos)
    # -----------------------------------------------------------------

    async def list_media(
        self,
        author_id: Optional[str] = None,
        search: Optional[str] = None,
        content_filter: ContentFilter = ContentFilter.all,
    ) -> List[Media]:
        return await self._list(
            self.repos.media,
            ContentType.media,
            Media,
            ("title", "description"),
            author_id,
            search,
            content_filter,
            extra_filters={"media_type": MediaType.video.value},
        )

    async def get_media(self, media_id: str) -> Media:
        return await self._get(self.repos.media, ContentType.media, Media, media_id)

    async def create_media(self, session: Optional[SessionUser], data: MediaCreate) -> Media:
        current = require_session(session)
        if not data.title.strip() or not data.youtube_url.strip():
            raise ValidationError("Title and video link are required")

        row = await self.repos.media.insert(
            {
                "title": data.title,
                "description": data.description,
                "cover_url": data.cover_url,
                "youtube_url": data.youtube_url,
                "media_type": MediaType.video.value,
                "is_paid": data.is_paid,
                "price": _paid_price(data.is_paid, data.price),
                "author_id": current.uid,
            }
        )
        logger.info(f"Author {current.uid} published video {row.get('id')}")
        return Media.model_validate({**row, "author_name": current.name})

    async def update_media(self, session: Optional[SessionUser], media_id: str, data: MediaUpdate) -> Media:
        await self._load_owned(self.repos.media, media_id, session, "Media")
        await self._update(self.repos.media, media_id, _edited_values(data, ("title", "youtube_url")))
        return await self.get_media(media_id)

    async def delete_media(self, session: Optional[SessionUser], media_id: str) -> None:
        await self._load_owned(self.repos.media, media_id, session, "Media")
        await self.repos.media.delete({"id": media_id})

    # -----------------------------------------------------------------
    # Uploads
    # -----------------------------------------------------------------

    async def upload_poster(
        self, session: Optional[SessionUser], filename: str, content_type: Optional[str], data: bytes
    ) -> str:
        current = require_session(session)
        return await self.storage.upload(
            self.config.buckets.posts,
            poster_path(current.uid, filename),
            data,
            content_type=content_type,
            upsert=True,
        )

    async def upload_cover(
        self, session: Optional[SessionUser], filename: str, content_type: Optional[str], data: bytes
    ) -> str:
        """Upload a book or video cover; images under the configured size only."""
        current = require_session(session)
        validate_cover_image(content_type, len(data), self.config.max_cover_size_mb)
        return await self.storage.upload(
            self.config.buckets.media,
            cover_path(current.uid, filename),
            data,
            content_type=content_type,
            upsert=True,
            cache_control="3600",
        )

    async def upload_book_file(
        self, session: Optional[SessionUser], filename: str, content_type: Optional[str], data: bytes
    ) -> str:
        current = require_session(session)
        return await self.storage.upload(
            self.config.buckets.books,
            book_file_path(current.uid, filename),
            data,
            content_type=content_type,
        )
