"""
Follower repository.

A row of ``followers`` is a directed edge ``user_id -> author_id``; the remote
table enforces uniqueness of the pair.
"""

from __future__ import annotations

from typing import List, Optional

from supabase import AsyncClient

from .base import Row, TableRepository


class FollowerRepository(TableRepository):
    """Data access for follow edges."""

    def __init__(self, client: AsyncClient) -> None:
        super().__init__(client, "followers")

    async def find_edge(self, user_id: str, author_id: str) -> Optional[Row]:
        return await self.first({"user_id": user_id, "author_id": author_id}, columns="id")

    async def add_edge(self, user_id: str, author_id: str) -> Row:
        return await self.insert({"user_id": user_id, "author_id": author_id})

    async def remove_edge(self, user_id: str, author_id: str) -> List[Row]:
        return await self.delete({"user_id": user_id, "author_id": author_id})

    async def for_author(self, author_id: str) -> List[Row]:
        return await self.select(filters={"author_id": author_id})

    async def followed_author_ids(self, user_id: str) -> List[str]:
        rows = await self.select("author_id", filters={"user_id": user_id})
        return [row["author_id"] for row in rows]

    async def count_for_author(self, author_id: str) -> int:
        return await self.count({"author_id": author_id})
