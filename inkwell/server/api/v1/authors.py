"""
Author Endpoints.

Author discovery, author pages, like statistics and the signed-in author's
own profile editing.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile

from inkwell.core.models.domain import AuthorLikeCounts, AuthorProfile, AuthorSummary, ProfileUpdateResult
from inkwell.core.models.io import AuthorProfileUpdate, UploadResult
from inkwell.server.services.deps import (
    CurrentAuthorDep,
    LikeServiceDep,
    OptionalUserDep,
    ProfileServiceDep,
)

router = APIRouter(tags=["authors"])


@router.get(
    "",
    response_model=List[AuthorSummary],
    summary="List Authors",
    description="Authors matching an optional name search, with follower counts.",
)
async def list_authors(
    profiles: ProfileServiceDep,
    viewer: OptionalUserDep,
    search: Optional[str] = Query(default=None, description="Substring of the author name"),
) -> List[AuthorSummary]:
    """
    List authors.

    For a signed-in caller every author other than the caller carries
    ``is_following``.
    """
    return await profiles.list_authors(search, viewer)


@router.patch(
    "/me",
    response_model=ProfileUpdateResult,
    summary="Update My Author Profile",
    description="Save the changed fields of the signed-in author's profile.",
    responses={403: {"description": "Caller is not an author"}},
)
async def update_my_profile(
    body: AuthorProfileUpdate, author: CurrentAuthorDep, profiles: ProfileServiceDep
) -> ProfileUpdateResult:
    return await profiles.update_author_profile(author, body)


@router.post(
    "/me/avatar",
    response_model=UploadResult,
    summary="Upload Author Avatar",
    description="Upload an avatar image; save the returned URL with PATCH /authors/me.",
)
async def upload_my_avatar(
    author: CurrentAuthorDep, profiles: ProfileServiceDep, file: UploadFile = File(...)
) -> UploadResult:
    data = await file.read()
    url = await profiles.upload_author_avatar(author, file.filename or "avatar", file.content_type, data)
    return UploadResult(url=url)


@router.get(
    "/{author_id}",
    response_model=AuthorProfile,
    summary="Get Author Profile",
    description="An author's page with publication, follower and like counts.",
    responses={404: {"description": "Author not found"}},
)
async def get_author(author_id: str, profiles: ProfileServiceDep, viewer: OptionalUserDep) -> AuthorProfile:
    return await profiles.get_author_profile(author_id, viewer)


@router.get(
    "/{author_id}/likes",
    response_model=AuthorLikeCounts,
    summary="Author Like Counts",
    description="Like count of every post, book and video of an author, and their total.",
)
async def get_author_likes(author_id: str, likes: LikeServiceDep) -> AuthorLikeCounts:
    return await likes.author_like_counts(author_id)
