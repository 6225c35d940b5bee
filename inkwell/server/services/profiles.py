"""
Profile Service.

Author pages, author discovery and reader settings, including avatar uploads.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.backend.storage import FileStorage, author_avatar_path, user_avatar_path
from inkwell.core.errors import NotFoundError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import (
    AuthorProfile,
    AuthorSummary,
    MediaType,
    ProfileUpdateResult,
    SessionUser,
    UserProfile,
)
from inkwell.core.models.io import AuthorProfileUpdate, UserProfileUpdate
from inkwell.server.core.config import Settings, settings

from .follows import FollowService, require_session
from .likes import LikeService

logger = get_logger(__name__)


class ProfileService:
    """Service layer for author profiles, author discovery and user settings."""

    def __init__(
        self,
        repos: BackendRepos,
        storage: FileStorage,
        follows: FollowService,
        likes: LikeService,
        config: Settings = settings,
    ) -> None:
        self.repos = repos
        self.storage = storage
        self.follows = follows
        self.likes = likes
        self.config = config

    async def _viewer_follows(self, viewer: Optional[SessionUser], author_id: str) -> Optional[bool]:
        if viewer is None or viewer.uid == author_id:
            return None
        return await self.follows.is_following(viewer, viewer.uid, author_id)

    # -----------------------------------------------------------------
    # Authors
    # -----------------------------------------------------------------

    async def get_author_profile(self, author_id: str, viewer: Optional[SessionUser] = None) -> AuthorProfile:
        """
        An author's page: profile row, publication and follower counts, total likes.

        Only videos count towards ``media_count``. ``is_following`` is set when
        a signed-in viewer looks at someone else's page.
        """
        author = await self.repos.authors.get(author_id)
        if author is None:
            raise NotFoundError("Author not found")

        posts, books, media, followers, likes = await asyncio.gather(
            self.repos.posts.count({"author_id": author_id}),
            self.repos.books.count({"author_id": author_id}),
            self.repos.media.count({"author_id": author_id, "media_type": MediaType.video.value}),
            self.repos.followers.count_for_author(author_id),
            self.likes.author_like_counts(author_id),
        )

        return AuthorProfile.model_validate(
            {
                **author,
                "achievements": author.get("achievements") or [],
                "posts_count": posts,
                "books_count": books,
                "media_count": media,
                "followers_count": followers,
                "total_likes": likes.total_likes,
                "is_following": await self._viewer_follows(viewer, author_id),
            }
        )

    async def update_author_profile(
        self, session: Optional[SessionUser], update: AuthorProfileUpdate
    ) -> ProfileUpdateResult:
        """
        Write only the fields that differ from the stored profile.

        The user's name and avatar are kept in sync with the author row.
        """
        current = require_session(session)
        author = await self.repos.authors.get(current.uid)
        if author is None:
            raise NotFoundError("Author not found")

        changed: Dict[str, Any] = {}
        for field in ("author_name", "bio", "avatar_url"):
            value = getattr(update, field)
            if value is not None and value != (author.get(field) or ""):
                changed[field] = value
        if update.achievements is not None and update.achievements != (author.get("achievements") or []):
            changed["achievements"] = update.achievements

        if not changed:
            return ProfileUpdateResult(changed=False, detail="No changes to save")

        await self.repos.authors.update(changed, {"id": current.uid})
        await self.repos.users.update(
            {
                "full_name": changed.get("author_name", author.get("author_name")),
                "avatar_url": changed.get("avatar_url", author.get("avatar_url")),
            },
            {"id": current.uid},
        )

        logger.info(f"Author {current.uid} updated {', '.join(sorted(changed))}")
        return ProfileUpdateResult(changed=True, updated_fields=sorted(changed), detail="Profile updated")

    async def upload_author_avatar(
        self, session: Optional[SessionUser], filename: str, content_type: Optional[str], data: bytes
    ) -> str:
        current = require_session(session)
        return await self.storage.upload(
            self.config.buckets.authors,
            author_avatar_path(current.uid, filename),
            data,
            content_type=content_type,
            upsert=True,
        )

    async def list_authors(
        self, search: Optional[str] = None, viewer: Optional[SessionUser] = None
    ) -> List[AuthorSummary]:
        """Authors whose name matches ``search``, with follower counts and the viewer's follow state."""
        authors = await self.repos.authors.select(
            "id, author_name, avatar_url, bio",
            search=(["author_name"], search) if search else None,
        )

        async def _summary(author) -> AuthorSummary:
            followers, following = await asyncio.gather(
                self.follows.get_followers_count(author["id"]),
                self._viewer_follows(viewer, author["id"]),
            )
            return AuthorSummary.model_validate({**author, "followers_count": followers, "is_following": following})

        return list(await asyncio.gather(*(_summary(author) for author in authors)))

    # -----------------------------------------------------------------
    # Users
    # -----------------------------------------------------------------

    async def get_user_profile(self, user_id: str) -> UserProfile:
        row = await self.repos.users.get(user_id)
        if row is None:
            raise NotFoundError("User not found")
        return UserProfile.model_validate(row)

    async def update_user_profile(self, session: Optional[SessionUser], update: UserProfileUpdate) -> UserProfile:
        """Change the display name and, when it differs, the avatar URL."""
        current = require_session(session)
        values: Dict[str, Any] = {"full_name": update.full_name}
        if update.avatar_url is not None and update.avatar_url != current.avatar_url:
            values["avatar_url"] = update.avatar_url

        await self.repos.users.update(values, {"id": current.uid})
        return await self.get_user_profile(current.uid)

    async def upload_user_avatar(
        self, session: Optional[SessionUser], filename: str, content_type: Optional[str], data: bytes
    ) -> UserProfile:
        """Store a new avatar and point the user's profile at it."""
        current = require_session(session)
        url = await self.storage.upload(
            self.config.buckets.users,
            user_avatar_path(current.uid, filename),
            data,
            content_type=content_type,
        )
        await self.repos.users.update(
            {"avatar_url": url, "updated_at": datetime.now(timezone.utc).isoformat()},
            {"id": current.uid},
        )
        return await self.get_user_profile(current.uid)
