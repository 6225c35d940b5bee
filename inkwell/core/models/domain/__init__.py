"""Domain enums and shapes for Inkwell."""

from .enums import ContentFilter, ContentType, MediaType, Role
from .models import (
    AuthorLikeCounts,
    AuthorProfile,
    AuthorSummary,
    Book,
    Comment,
    CommentAuthor,
    Follower,
    FollowerProfile,
    FollowerUser,
    FollowStatus,
    LikeState,
    LoginResult,
    Media,
    Post,
    PostView,
    ProfileUpdateResult,
    SessionUser,
    SubscribedAuthor,
    UserProfile,
)

__all__ = [
    "AuthorLikeCounts",
    "AuthorProfile",
    "AuthorSummary",
    "Book",
    "Comment",
    "CommentAuthor",
    "ContentFilter",
    "ContentType",
    "Follower",
    "FollowerProfile",
    "FollowerUser",
    "FollowStatus",
    "LikeState",
    "LoginResult",
    "Media",
    "MediaType",
    "Post",
    "PostView",
    "ProfileUpdateResult",
    "Role",
    "SessionUser",
    "SubscribedAuthor",
    "UserProfile",
]
