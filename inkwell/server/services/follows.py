"""
Follow Service.

Maintains the user -> author follow graph: follow and unfollow, follower
counts and lists for authors, and the subscription list of a reader.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from inkwell.core.backend.repositories import BackendRepos
from inkwell.core.errors import (
    AuthenticationError,
    ConflictError,
    InkwellError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import (
    Follower,
    FollowerProfile,
    FollowerUser,
    FollowStatus,
    SessionUser,
    SubscribedAuthor,
)
from inkwell.core.monitoring import log_social_action

logger = get_logger(__name__)


def require_session(session: Optional[SessionUser]) -> SessionUser:
    """Return the session user or raise when nobody is signed in."""
    if session is None:
        raise AuthenticationError("User is not authenticated")
    return session


class FollowService:
    """Service layer for the follow graph."""

    def __init__(self, repos: BackendRepos) -> None:
        self.repos = repos

    async def is_following(self, session: Optional[SessionUser], user_id: str, author_id: str) -> bool:
        """
        Whether ``user_id`` follows ``author_id``.

        Every failure, a missing session included, is logged and reported as
        ``False``.
        """
        try:
            require_session(session)
            return await self.repos.followers.find_edge(user_id, author_id) is not None
        except InkwellError as e:
            logger.error(f"Failed to check follow {user_id} -> {author_id}: {e.message}")
            return False

    async def get_follow_status(self, session: Optional[SessionUser], user_id: str, author_id: str) -> FollowStatus:
        """Like ``is_following`` but backend failures propagate."""
        require_session(session)
        edge = await self.repos.followers.find_edge(user_id, author_id)
        return FollowStatus(exists=edge is not None)

    async def follow(self, session: Optional[SessionUser], user_id: str, author_id: str) -> Follower:
        """
        Create the edge ``user_id -> author_id``.

        Raises:
            AuthenticationError: Nobody is signed in
            PermissionDeniedError: Following on behalf of someone else
            ValidationError: Following oneself
            NotFoundError: The author does not exist
            ConflictError: The edge already exists
        """
        current = require_session(session)
        if current.uid != user_id:
            raise PermissionDeniedError("Cannot follow on behalf of another user")
        if user_id == author_id:
            raise ValidationError("You cannot follow yourself")

        if await self.repos.authors.get(author_id, columns="id") is None:
            raise NotFoundError("Author not found")

        if await self.repos.followers.find_edge(user_id, author_id) is not None:
            raise ConflictError("Already following this author")

        try:
            row = await self.repos.followers.add_edge(user_id, author_id)
        except ConflictError as e:
            # lost a race with a concurrent follow
            raise ConflictError("Already following this author", code=e.code) from e

        log_social_action("follow", user_id=user_id, author_id=author_id)
        logger.info(f"User {user_id} now follows author {author_id}")
        return Follower.model_validate(row)

    async def unfollow(self, session: Optional[SessionUser], user_id: str, author_id: str) -> bool:
        """
        Remove the edge ``user_id -> author_id``; a missing edge is not an error.

        Either side of the edge may remove it: the follower unfollows, the
        author removes a follower.
        """
        current = require_session(session)
        if current.uid not in (user_id, author_id):
            raise PermissionDeniedError("Cannot remove a follow edge you are not part of")

        await self.repos.followers.remove_edge(user_id, author_id)
        log_social_action("unfollow", user_id=user_id, author_id=author_id)
        return True

    async def get_followers_count(self, author_id: str) -> int:
        """Number of followers of ``author_id``; 0 when the count fails."""
        try:
            return await self.repos.followers.count_for_author(author_id)
        except InkwellError as e:
            logger.error(f"Failed to count followers of {author_id}: {e.message}")
            return 0

    async def get_followers(self, author_id: str) -> List[Follower]:
        """Raw follow edges of ``author_id``; empty when the read fails."""
        try:
            rows = await self.repos.followers.for_author(author_id)
        except InkwellError as e:
            logger.error(f"Failed to list followers of {author_id}: {e.message}")
            return []
        return [Follower.model_validate(row) for row in rows]

    async def list_follower_profiles(self, author_id: str) -> List[FollowerProfile]:
        """
        Followers of ``author_id`` joined with their user rows and role names.

        Edges whose user row is missing are dropped; an unknown role reads as ``"user"``.
        """
        edges = await self.repos.followers.for_author(author_id)
        if not edges:
            return []

        users = await self.repos.users.select(
            "id, email, full_name, role_id, avatar_url",
            in_=("id", [edge["user_id"] for edge in edges]),
        )
        roles = await self.repos.roles.select("id, name")
        role_names = {role["id"]: role["name"] for role in roles}
        users_by_id = {user["id"]: user for user in users}

        profiles = []
        for edge in edges:
            user = users_by_id.get(edge["user_id"])
            if user is None:
                logger.warning(f"Follower {edge['user_id']} of {author_id} has no user row")
                continue
            profiles.append(
                FollowerProfile(
                    id=edge["id"],
                    user_id=edge["user_id"],
                    created_at=edge.get("created_at"),
                    user=FollowerUser(
                        email=user.get("email"),
                        full_name=user.get("full_name"),
                        role_id=user.get("role_id"),
                        role=role_names.get(user.get("role_id"), "user"),
                        avatar_url=user.get("avatar_url"),
                    ),
                )
            )
        return profiles

    async def remove_follower(self, session: Optional[SessionUser], follower_user_id: str) -> bool:
        """Remove ``follower_user_id`` from the signed-in author's followers."""
        current = require_session(session)
        return await self.unfollow(current, follower_user_id, current.uid)

    async def list_subscriptions(self, user_id: str, search: Optional[str] = None) -> List[SubscribedAuthor]:
        """
        Authors followed by ``user_id`` with their post, book and media counts.

        ``search`` keeps authors whose name contains it, case-insensitively.
        """
        author_ids = await self.repos.followers.followed_author_ids(user_id)
        if not author_ids:
            return []

        authors = await self.repos.authors.select(
            "id, author_name, avatar_url, bio",
            in_=("id", author_ids),
        )

        async def _with_counts(author) -> SubscribedAuthor:
            posts, books, media = await asyncio.gather(
                self.repos.posts.count({"author_id": author["id"]}),
                self.repos.books.count({"author_id": author["id"]}),
                self.repos.media.count({"author_id": author["id"]}),
            )
            return SubscribedAuthor.model_validate(
                {**author, "posts_count": posts, "books_count": books, "media_count": media}
            )

        subscriptions = await asyncio.gather(*(_with_counts(author) for author in authors))

        if search and search.strip():
            term = search.strip().lower()
            subscriptions = [item for item in subscriptions if term in (item.author_name or "").lower()]
        return list(subscriptions)
