"""
Like Endpoints.

Like state and like toggling for posts, books and media.
"""

from fastapi import APIRouter

from inkwell.core.models.domain import ContentType, LikeState
from inkwell.server.services.deps import LikeServiceDep, OptionalUserDep

router = APIRouter(tags=["likes"])


@router.get(
    "/{content_type}/{content_id}",
    response_model=LikeState,
    summary="Like State",
    description="Like count of an item and, for a signed-in caller, whether they liked it.",
)
async def get_like_state(
    content_type: ContentType, content_id: str, user: OptionalUserDep, likes: LikeServiceDep
) -> LikeState:
    return await likes.get_like_state(user, content_type, content_id)


@router.post(
    "/{content_type}/{content_id}/toggle",
    response_model=LikeState,
    summary="Toggle Like",
    description="Like the item, or remove the caller's like if it exists.",
    responses={
        401: {"description": "Sign in to rate content"},
        502: {"description": "Toggle failed; details carry the re-read like count"},
    },
)
async def toggle_like(
    content_type: ContentType, content_id: str, user: OptionalUserDep, likes: LikeServiceDep
) -> LikeState:
    return await likes.toggle_like(user, content_type, content_id)
