"""
Follow Endpoints.

Follow and unfollow authors, follower counts and lists, and the signed-in
user's subscriptions. Routes under ``/me`` act on the caller.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from inkwell.core.models.domain import Follower, FollowerProfile, FollowStatus, SubscribedAuthor
from inkwell.core.models.io import Acknowledgement
from inkwell.server.services.deps import CurrentAuthorDep, CurrentUserDep, FollowServiceDep

router = APIRouter(tags=["follows"])


@router.get(
    "/me/followers",
    response_model=List[FollowerProfile],
    summary="List My Followers",
    description="Followers of the signed-in author with their user details and role names.",
    responses={403: {"description": "Caller is not an author"}},
)
async def list_my_followers(author: CurrentAuthorDep, follows: FollowServiceDep) -> List[FollowerProfile]:
    return await follows.list_follower_profiles(author.uid)


@router.delete(
    "/me/followers/{user_id}",
    response_model=Acknowledgement,
    summary="Remove Follower",
    description="Remove a user from the signed-in author's followers.",
)
async def remove_follower(user_id: str, author: CurrentAuthorDep, follows: FollowServiceDep) -> Acknowledgement:
    await follows.remove_follower(author, user_id)
    return Acknowledgement(detail="Follower removed")


@router.get(
    "/me/subscriptions",
    response_model=List[SubscribedAuthor],
    summary="List My Subscriptions",
    description="Authors followed by the signed-in user, with post, book and media counts.",
)
async def list_my_subscriptions(
    user: CurrentUserDep,
    follows: FollowServiceDep,
    search: Optional[str] = Query(default=None, description="Case-insensitive author name filter"),
) -> List[SubscribedAuthor]:
    return await follows.list_subscriptions(user.uid, search)


@router.get(
    "/{author_id}/status",
    response_model=FollowStatus,
    summary="Follow Status",
    description="Whether the signed-in user follows the author.",
)
async def get_follow_status(author_id: str, user: CurrentUserDep, follows: FollowServiceDep) -> FollowStatus:
    return await follows.get_follow_status(user, user.uid, author_id)


@router.get(
    "/{author_id}/count",
    summary="Followers Count",
    description="Number of followers of an author; 0 when the count cannot be read.",
    response_description="Object with the author id and follower count.",
)
async def get_followers_count(author_id: str, follows: FollowServiceDep):
    return {"author_id": author_id, "followers_count": await follows.get_followers_count(author_id)}


@router.post(
    "/{author_id}",
    response_model=Follower,
    status_code=status.HTTP_201_CREATED,
    summary="Follow Author",
    description="Follow an author as the signed-in user.",
    responses={
        404: {"description": "Author not found"},
        409: {"description": "Already following"},
        422: {"description": "Cannot follow yourself"},
    },
)
async def follow_author(author_id: str, user: CurrentUserDep, follows: FollowServiceDep) -> Follower:
    return await follows.follow(user, user.uid, author_id)


@router.delete(
    "/{author_id}",
    response_model=Acknowledgement,
    summary="Unfollow Author",
    description="Stop following an author. Unfollowing an author you do not follow succeeds.",
)
async def unfollow_author(author_id: str, user: CurrentUserDep, follows: FollowServiceDep) -> Acknowledgement:
    await follows.unfollow(user, user.uid, author_id)
    return Acknowledgement(detail="Unfollowed")
