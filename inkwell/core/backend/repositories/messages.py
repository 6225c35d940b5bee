"""
Message repository.

Comments on an author's page are rows of ``messages`` written ``from_user``
and addressed ``to_author``.
"""

from __future__ import annotations

from typing import List

from supabase import AsyncClient

from .base import Row, TableRepository


class MessageRepository(TableRepository):
    """Data access for the comment stream of an author."""

    def __init__(self, client: AsyncClient) -> None:
        super().__init__(client, "messages")

    async def for_author(self, author_id: str) -> List[Row]:
        """Messages addressed to ``author_id``, newest first."""
        return await self.select(filters={"to_author": author_id}, order_by="created_at", descending=True)

    async def add(self, from_user: str, to_author: str, content: str) -> Row:
        return await self.insert({"content": content, "from_user": from_user, "to_author": to_author})
