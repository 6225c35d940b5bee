"""
Domain shapes assembled from backend rows.

None of these models is authoritative: they are local views built from query
results and returned to API clients. Unknown row columns are ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import ContentType, Role


class _RowModel(BaseModel):
    model_config = ConfigDict(extra="ignore", from_attributes=True)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginResult(BaseModel):
    """Outcome of a successful sign-up or sign-in."""

    uid: str
    name: str
    role: Role
    token: str = Field(default="", description="Access token; empty when e-mail confirmation is pending")


class SessionUser(BaseModel):
    """The signed-in user resolved from an access token."""

    uid: str
    name: str
    role: Role
    token: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def is_author(self) -> bool:
        return self.role == Role.author


# ---------------------------------------------------------------------------
# Users and authors
# ---------------------------------------------------------------------------


class UserProfile(_RowModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role_id: Optional[Any] = None
    updated_at: Optional[datetime] = None


class AuthorSummary(_RowModel):
    """An author in the discovery list."""

    id: str
    author_name: str = ""
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    followers_count: int = 0
    is_following: Optional[bool] = None


class SubscribedAuthor(_RowModel):
    """An author the current user follows, with publication counts."""

    id: str
    author_name: str = ""
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    posts_count: int = 0
    books_count: int = 0
    media_count: int = 0


class AuthorProfile(_RowModel):
    """An author page: the ``authors`` row plus aggregated counts."""

    id: str
    author_name: str = ""
    avatar_url: Optional[str] = None
    banner_url: Optional[str] = None
    bio: Optional[str] = None
    achievements: List[Any] = Field(default_factory=list)
    posts_count: int = 0
    books_count: int = 0
    media_count: int = 0
    followers_count: int = 0
    total_likes: int = 0
    is_following: Optional[bool] = None


class ProfileUpdateResult(BaseModel):
    changed: bool
    updated_fields: List[str] = Field(default_factory=list)
    detail: str


class AuthorLikeCounts(BaseModel):
    """Like counts of every post, book and media item of an author."""

    author_id: str
    like_counts: Dict[str, int] = Field(default_factory=dict)
    total_likes: int = 0


# ---------------------------------------------------------------------------
# Social graph
# ---------------------------------------------------------------------------


class FollowStatus(BaseModel):
    exists: bool


class Follower(_RowModel):
    id: str
    author_id: str
    user_id: str
    created_at: Optional[datetime] = None


class FollowerUser(_RowModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    role_id: Optional[Any] = None
    role: str = "user"
    avatar_url: Optional[str] = None


class FollowerProfile(_RowModel):
    """A follower of the current author, with the follower's user details."""

    id: str
    user_id: str
    created_at: Optional[datetime] = None
    user: FollowerUser


class LikeState(BaseModel):
    content_type: ContentType
    content_id: str
    liked: bool
    likes_count: int


class CommentAuthor(_RowModel):
    id: str
    full_name: str = "User"
    avatar_url: Optional[str] = None


class Comment(_RowModel):
    id: str
    content: str
    created_at: Optional[datetime] = None
    to_author: str
    from_user: CommentAuthor


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class _Content(_RowModel):
    id: str
    author_id: str
    title: str = ""
    is_paid: bool = False
    created_at: Optional[datetime] = None
    author_name: Optional[str] = None
    likes_count: int = 0


class Post(_Content):
    content: str = ""
    poster_url: Optional[str] = None


class PostView(Post):
    author_avatar: Optional[str] = None
    reading_time: int = Field(default=0, description="Estimated reading time in minutes")


class Book(_Content):
    description: Optional[str] = None
    cover_url: Optional[str] = None
    file_url: Optional[str] = None
    price: float = 0


class Media(_Content):
    description: Optional[str] = None
    cover_url: Optional[str] = None
    youtube_url: Optional[str] = None
    media_type: str = "video"
    price: float = 0
