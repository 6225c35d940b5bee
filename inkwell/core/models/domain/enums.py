"""Domain enums for Inkwell."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of a registered user, stored by name in the ``roles`` table."""

    author = "author"  # May publish posts, books and media.
    reader = "reader"  # May browse, follow, like and comment.


class ContentType(str, Enum):
    """
    Kinds of likeable content.

    The value names the foreign-key column of the ``likes`` table: ``<value>_id``.
    """

    post = "post"
    book = "book"
    media = "media"

    @property
    def like_column(self) -> str:
        return f"{self.value}_id"


class MediaType(str, Enum):
    video = "video"


class ContentFilter(str, Enum):
    """Listing filters applied after rows are assembled."""

    all = "all"  # Store order.
    new = "new"  # Newest first.
    popular = "popular"  # Most liked first, top N only.
    most_liked = "mostLiked"  # Liked at least once, most liked first.
