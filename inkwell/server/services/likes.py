"""
Like Service.

Per-user like toggles on posts, books and media, and like counts aggregated
per item and per author.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.errors import AuthenticationError, InkwellError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import AuthorLikeCounts, ContentType, LikeState, SessionUser
from inkwell.core.monitoring import log_social_action

logger = get_logger(__name__)


class LikeService:
    """Service layer for likes."""

    def __init__(self, repos: BackendRepos) -> None:
        self.repos = repos

    def _content_repo(self, content_type: ContentType):
        return {
            ContentType.post: self.repos.posts,
            ContentType.book: self.repos.books,
            ContentType.media: self.repos.media,
        }[content_type]

    async def count_likes(self, content_type: ContentType, content_id: str) -> int:
        return await self.repos.likes.count_for(content_type, content_id)

    async def get_like_state(
        self, session: Optional[SessionUser], content_type: ContentType, content_id: str
    ) -> LikeState:
        """Like count of an item and whether the signed-in user (if any) liked it."""
        likes_count = await self.count_likes(content_type, content_id)
        liked = False
        if session is not None:
            liked = await self.repos.likes.find_like(session.uid, content_type, content_id) is not None
        return LikeState(content_type=content_type, content_id=content_id, liked=liked, likes_count=likes_count)

    async def _recover_count(self, content_type: ContentType, content_id: str) -> Optional[int]:
        try:
            return await self.count_likes(content_type, content_id)
        except InkwellError as e:
            logger.error(f"Failed to re-read likes of {content_type.value} {content_id}: {e.message}")
            return None

    async def toggle_like(
        self, session: Optional[SessionUser], content_type: ContentType, content_id: str
    ) -> LikeState:
        """
        Like the item when the user has not, otherwise remove the like.

        When the toggle fails the authoritative count is re-read and attached
        to the raised error as ``details``.

        Raises:
            AuthenticationError: Nobody is signed in
        """
        if session is None:
            raise AuthenticationError("Sign in to rate content")

        try:
            existing = await self.repos.likes.find_like(session.uid, content_type, content_id)
            likes_count = await self.count_likes(content_type, content_id)
            if existing:
                await self.repos.likes.remove_like(session.uid, content_type, content_id)
                state = LikeState(
                    content_type=content_type,
                    content_id=content_id,
                    liked=False,
                    likes_count=max(0, likes_count - 1),
                )
            else:
                await self.repos.likes.add_like(session.uid, content_type, content_id)
                state = LikeState(
                    content_type=content_type,
                    content_id=content_id,
                    liked=True,
                    likes_count=likes_count + 1,
                )
        except InkwellError as e:
            logger.error(f"Like toggle on {content_type.value} {content_id} failed: {e.message}")
            recovered = await self._recover_count(content_type, content_id)
            if recovered is not None:
                e.details = {"liked": None, "likes_count": recovered}
            raise

        log_social_action("like" if state.liked else "unlike", user_id=session.uid, content_id=content_id)
        return state

    async def author_like_counts(self, author_id: str) -> AuthorLikeCounts:
        """Like count of every item the author published, keyed by item id."""

        async def _counts(content_type: ContentType) -> Dict[str, int]:
            rows = await self._content_repo(content_type).select("id", filters={"author_id": author_id})
            return await self.repos.likes.counts_for(content_type, [row["id"] for row in rows])

        per_type = await asyncio.gather(*(_counts(content_type) for content_type in ContentType))

        like_counts: Dict[str, int] = {}
        for counts in per_type:
            like_counts.update(counts)
        return AuthorLikeCounts(author_id=author_id, like_counts=like_counts, total_likes=sum(like_counts.values()))
