"""
Service Dependencies.

Builds the feature services over the shared backend client for each request
and resolves the caller's session from the ``Authorization: Bearer`` header.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import AsyncClient

from inkwell.core.backend import (
    BackendRepos,
    FileStorage,
    SessionClientFactory,
    build_repos,
    get_backend_client,
    get_session_client_factory,
)
from inkwell.core.errors import AuthenticationError, PermissionDeniedError
from inkwell.core.models.domain import SessionUser

from .auth import AuthService
from .comments import CommentService
from .content import ContentService
from .follows import FollowService
from .likes import LikeService
from .profiles import ProfileService

bearer_scheme = HTTPBearer(auto_error=False)

BackendClientDep = Annotated[AsyncClient, Depends(get_backend_client)]


def get_repos(client: BackendClientDep) -> BackendRepos:
    return build_repos(client)


ReposDep = Annotated[BackendRepos, Depends(get_repos)]


def get_file_storage(client: BackendClientDep) -> FileStorage:
    return FileStorage(client)


FileStorageDep = Annotated[FileStorage, Depends(get_file_storage)]


def get_auth_service(
    client: BackendClientDep,
    repos: ReposDep,
    session_clients: Annotated[SessionClientFactory, Depends(get_session_client_factory)],
) -> AuthService:
    return AuthService(client, repos, session_clients)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_follow_service(repos: ReposDep) -> FollowService:
    return FollowService(repos)


FollowServiceDep = Annotated[FollowService, Depends(get_follow_service)]


def get_like_service(repos: ReposDep) -> LikeService:
    return LikeService(repos)


LikeServiceDep = Annotated[LikeService, Depends(get_like_service)]


def get_comment_service(client: BackendClientDep, repos: ReposDep) -> CommentService:
    return CommentService(client, repos)


CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]


def get_profile_service(
    repos: ReposDep, storage: FileStorageDep, follows: FollowServiceDep, likes: LikeServiceDep
) -> ProfileService:
    return ProfileService(repos, storage, follows, likes)


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]


def get_content_service(repos: ReposDep, storage: FileStorageDep) -> ContentService:
    return ContentService(repos, storage)


ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]


def get_bearer_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Optional[str]:
    return credentials.credentials if credentials else None


BearerTokenDep = Annotated[Optional[str], Depends(get_bearer_token)]


async def get_optional_user(token: BearerTokenDep, auth: AuthServiceDep) -> Optional[SessionUser]:
    """The signed-in user, or None for anonymous callers and rejected tokens."""
    return await auth.check_session(token)


OptionalUserDep = Annotated[Optional[SessionUser], Depends(get_optional_user)]


async def get_current_user(user: OptionalUserDep) -> SessionUser:
    if user is None:
        raise AuthenticationError("User is not authenticated")
    return user


CurrentUserDep = Annotated[SessionUser, Depends(get_current_user)]


async def get_current_author(user: CurrentUserDep) -> SessionUser:
    if not user.is_author:
        raise PermissionDeniedError("Only authors can perform this action")
    return user


CurrentAuthorDep = Annotated[SessionUser, Depends(get_current_author)]
