"""
Comment Service.

Comments are messages written by a user on an author's page. Besides the
usual list/add/delete, ``stream_comments`` follows new inserts through the
backend's realtime channel and yields the refreshed list after each one.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional

from supabase import AsyncClient

from inkwell.core.backend.realtime import subscribe_inserts, unsubscribe
from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import Comment, CommentAuthor, SessionUser
from inkwell.core.monitoring import log_social_action

from .follows import require_session

logger = get_logger(__name__)


def _comment_author(user_id: str, user: Optional[Dict[str, Any]]) -> CommentAuthor:
    user = user or {}
    return CommentAuthor(
        id=user_id,
        full_name=user.get("full_name") or "User",
        avatar_url=user.get("avatar_url"),
    )


class CommentService:
    """Service layer for comments on author pages."""

    def __init__(self, client: AsyncClient, repos: BackendRepos) -> None:
        self.client = client
        self.repos = repos

    async def list_comments(self, author_id: str) -> List[Comment]:
        """Comments addressed to ``author_id``, newest first, with their writers."""
        rows = await self.repos.messages.for_author(author_id)
        if not rows:
            return []

        writer_ids = {row["from_user"] for row in rows}
        users = await self.repos.users.select("id, full_name, avatar_url", in_=("id", writer_ids))
        users_by_id = {user["id"]: user for user in users}

        return [
            Comment(
                id=row["id"],
                content=row.get("content") or "",
                created_at=row.get("created_at"),
                to_author=row["to_author"],
                from_user=_comment_author(row["from_user"], users_by_id.get(row["from_user"])),
            )
            for row in rows
        ]

    async def add_comment(self, session: Optional[SessionUser], author_id: str, content: str) -> Comment:
        """
        Post a comment on ``author_id``'s page.

        Raises:
            AuthenticationError: Nobody is signed in
            ValidationError: The trimmed comment is empty
        """
        current = require_session(session)
        text = content.strip()
        if not text:
            raise ValidationError("Comment cannot be empty")

        writer = await self.repos.users.get(current.uid, columns="full_name, avatar_url")
        row = await self.repos.messages.add(current.uid, author_id, text)

        log_social_action("comment", user_id=current.uid, author_id=author_id)
        return Comment(
            id=row.get("id") or str(uuid.uuid4()),
            content=text,
            created_at=row.get("created_at") or datetime.now(timezone.utc),
            to_author=author_id,
            from_user=_comment_author(current.uid, writer),
        )

    async def delete_comment(self, session: Optional[SessionUser], comment_id: str) -> None:
        """
        Delete a comment; allowed to its writer and to the author it addresses.

        Raises:
            NotFoundError: No such comment
            PermissionDeniedError: The caller is neither writer nor addressee
        """
        current = require_session(session)
        row = await self.repos.messages.get(comment_id, columns="id, from_user, to_author")
        if row is None:
            raise NotFoundError("Comment not found")
        if current.uid not in (row["from_user"], row["to_author"]):
            raise PermissionDeniedError("Only the writer or the author can delete this comment")

        await self.repos.messages.delete({"id": comment_id})
        logger.info(f"Comment {comment_id} deleted by {current.uid}")

    async def stream_comments(self, author_id: str) -> AsyncGenerator[List[Comment], None]:
        """
        Yield the comment list now and again after every new comment.

        The realtime channel is removed when the consumer closes the generator.
        """
        queue: asyncio.Queue = asyncio.Queue()
        loop = asyncio.get_running_loop()

        def _on_insert(payload: Dict[str, Any]) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, payload)

        channel = await subscribe_inserts(self.client, "messages", f"to_author=eq.{author_id}", _on_insert)
        try:
            yield await self.list_comments(author_id)
            while True:
                await queue.get()
                yield await self.list_comments(author_id)
        finally:
            await unsubscribe(self.client, channel)
            logger.debug(f"Comment stream for {author_id} closed")
