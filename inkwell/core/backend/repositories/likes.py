"""
Like repository.

A row of ``likes`` references exactly one piece of content through one of the
``post_id``, ``book_id`` or ``media_id`` columns.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Optional

from supabase import AsyncClient

from inkwell.core.models.domain.enums import ContentType

from .base import Row, TableRepository


class LikeRepository(TableRepository):
    """Data access for likes on posts, books and media."""

    def __init__(self, client: AsyncClient) -> None:
        super().__init__(client, "likes")

    async def find_like(self, user_id: str, content_type: ContentType, content_id: str) -> Optional[Row]:
        return await self.first({"user_id": user_id, content_type.like_column: content_id})

    async def add_like(self, user_id: str, content_type: ContentType, content_id: str) -> Row:
        return await self.insert({"user_id": user_id, content_type.like_column: content_id})

    async def remove_like(self, user_id: str, content_type: ContentType, content_id: str) -> List[Row]:
        return await self.delete({"user_id": user_id, content_type.like_column: content_id})

    async def count_for(self, content_type: ContentType, content_id: str) -> int:
        return await self.count({content_type.like_column: content_id})

    async def counts_for(self, content_type: ContentType, content_ids: Iterable[str]) -> Dict[str, int]:
        """Like count per content id, zero for ids nobody liked."""
        ids = list(content_ids)
        column = content_type.like_column
        rows = await self.select(column, in_=(column, ids))
        counter = Counter(row[column] for row in rows)
        return {content_id: counter.get(content_id, 0) for content_id in ids}
