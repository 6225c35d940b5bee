"""
User Settings Endpoints.

The signed-in user's own profile: name and avatar.
"""

from fastapi import APIRouter, File, UploadFile

from inkwell.core.models.domain import UserProfile
from inkwell.core.models.io import UserProfileUpdate
from inkwell.server.services.deps import CurrentUserDep, ProfileServiceDep

router = APIRouter(tags=["users"])


@router.get(
    "/me",
    response_model=UserProfile,
    summary="Get My Profile",
    responses={404: {"description": "User row missing"}},
)
async def get_me(user: CurrentUserDep, profiles: ProfileServiceDep) -> UserProfile:
    return await profiles.get_user_profile(user.uid)


@router.patch(
    "/me",
    response_model=UserProfile,
    summary="Update My Profile",
    description="Change the display name and optionally the avatar URL.",
)
async def update_me(body: UserProfileUpdate, user: CurrentUserDep, profiles: ProfileServiceDep) -> UserProfile:
    return await profiles.update_user_profile(user, body)


@router.post(
    "/me/avatar",
    response_model=UserProfile,
    summary="Upload My Avatar",
    description="Upload an avatar image and set it on the profile.",
)
async def upload_my_avatar(
    user: CurrentUserDep, profiles: ProfileServiceDep, file: UploadFile = File(...)
) -> UserProfile:
    data = await file.read()
    return await profiles.upload_user_avatar(user, file.filename or "avatar", file.content_type, data)
