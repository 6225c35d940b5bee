"""
Media Endpoints.

Videos hosted elsewhere and published by link, with an optional cover image.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from inkwell.core.models.domain import ContentFilter, Media
from inkwell.core.models.io import Acknowledgement, MediaCreate, MediaUpdate, UploadResult
from inkwell.server.services.deps import ContentServiceDep, CurrentAuthorDep

router = APIRouter(tags=["media"])


@router.get(
    "",
    response_model=List[Media],
    summary="List Videos",
    description="Videos with their author name and like count, optionally filtered and searched.",
)
async def list_media(
    content: ContentServiceDep,
    author_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Substring of the title or description"),
    content_filter: ContentFilter = Query(default=ContentFilter.all, alias="filter"),
) -> List[Media]:
    return await content.list_media(author_id, search, content_filter)


@router.post(
    "/cover",
    response_model=UploadResult,
    summary="Upload Video Cover",
    responses={422: {"description": "Not an image, or too large"}},
)
async def upload_media_cover(
    author: CurrentAuthorDep, content: ContentServiceDep, file: UploadFile = File(...)
) -> UploadResult:
    data = await file.read()
    return UploadResult(url=await content.upload_cover(author, file.filename or "cover", file.content_type, data))


@router.get(
    "/{media_id}",
    response_model=Media,
    summary="Get Video",
    responses={404: {"description": "Video not found"}},
)
async def get_media(media_id: str, content: ContentServiceDep) -> Media:
    return await content.get_media(media_id)


@router.post(
    "",
    response_model=Media,
    status_code=status.HTTP_201_CREATED,
    summary="Publish Video",
)
async def create_media(body: MediaCreate, author: CurrentAuthorDep, content: ContentServiceDep) -> Media:
    return await content.create_media(author, body)


@router.patch(
    "/{media_id}",
    response_model=Media,
    summary="Edit Video",
    responses={403: {"description": "Not the video's author"}, 404: {"description": "Video not found"}},
)
async def update_media(
    media_id: str, body: MediaUpdate, author: CurrentAuthorDep, content: ContentServiceDep
) -> Media:
    return await content.update_media(author, media_id, body)


@router.delete(
    "/{media_id}",
    response_model=Acknowledgement,
    summary="Delete Video",
    responses={403: {"description": "Not the video's author"}, 404: {"description": "Video not found"}},
)
async def delete_media(media_id: str, author: CurrentAuthorDep, content: ContentServiceDep) -> Acknowledgement:
    await content.delete_media(author, media_id)
    return Acknowledgement(detail="Video deleted")
