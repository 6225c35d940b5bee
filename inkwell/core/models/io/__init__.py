"""
I/O models for API requests and responses.

Response bodies reuse the domain shapes from ``inkwell.core.models.domain``;
this package holds the request bodies and small envelopes.
"""

from .auth import SignInRequest, SignUpRequest
from .content import BookCreate, BookUpdate, MediaCreate, MediaUpdate, PostCreate, PostUpdate
from .profiles import AuthorProfileUpdate, UploadResult, UserProfileUpdate
from .social import Acknowledgement, CommentCreate

__all__ = [
    "Acknowledgement",
    "AuthorProfileUpdate",
    "BookCreate",
    "BookUpdate",
    "CommentCreate",
    "MediaCreate",
    "MediaUpdate",
    "PostCreate",
    "PostUpdate",
    "SignInRequest",
    "SignUpRequest",
    "UploadResult",
    "UserProfileUpdate",
]
