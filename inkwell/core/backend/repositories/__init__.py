"""
Table repository layer over the backend-as-a-service.

Modules:
- base: TableRepository and remote error translation
- followers: follow edges
- likes: likes on posts, books and media
- messages: comments addressed to an author
- bundle: BackendRepos, one repository per table
"""

from .base import TableRepository, translate_api_error
from .bundle import BackendRepos, build_repos
from .followers import FollowerRepository
from .likes import LikeRepository
from .messages import MessageRepository

__all__ = [
    "BackendRepos",
    "FollowerRepository",
    "LikeRepository",
    "MessageRepository",
    "TableRepository",
    "build_repos",
    "translate_api_error",
]
