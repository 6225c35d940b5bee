"""
Post Endpoints.

Listing, reading, publishing, editing and deleting posts, and poster uploads.
Writing requires an author session; authors may only touch their own posts.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from inkwell.core.models.domain import ContentFilter, Post, PostView
from inkwell.core.models.io import Acknowledgement, PostCreate, PostUpdate, UploadResult
from inkwell.server.services.deps import ContentServiceDep, CurrentAuthorDep

router = APIRouter(tags=["posts"])


@router.get(
    "",
    response_model=List[Post],
    summary="List Posts",
    description="Posts with their author name and like count, optionally filtered and searched.",
)
async def list_posts(
    content: ContentServiceDep,
    author_id: Optional[str] = Query(default=None, description="Only posts of this author"),
    search: Optional[str] = Query(default=None, description="Substring of the title or body"),
    content_filter: ContentFilter = Query(default=ContentFilter.all, alias="filter"),
) -> List[Post]:
    """
    List posts.

    - **filter**: ``all`` (store order), ``new`` (newest first), ``popular``
      (most liked, top entries only) or ``mostLiked`` (liked posts, most liked first).
    """
    return await content.list_posts(author_id, search, content_filter)


@router.post(
    "/poster",
    response_model=UploadResult,
    summary="Upload Poster",
    description="Upload a poster image for a post; pass the returned URL as poster_url.",
)
async def upload_poster(
    author: CurrentAuthorDep, content: ContentServiceDep, file: UploadFile = File(...)
) -> UploadResult:
    data = await file.read()
    return UploadResult(url=await content.upload_poster(author, file.filename or "poster", file.content_type, data))


@router.get(
    "/{post_id}",
    response_model=PostView,
    summary="Read Post",
    description="A post with its author, like count and estimated reading time.",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: str, content: ContentServiceDep) -> PostView:
    return await content.get_post_view(post_id)


@router.post(
    "",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    summary="Publish Post",
    responses={422: {"description": "Title or content missing"}},
)
async def create_post(body: PostCreate, author: CurrentAuthorDep, content: ContentServiceDep) -> Post:
    return await content.create_post(author, body)


@router.patch(
    "/{post_id}",
    response_model=Post,
    summary="Edit Post",
    responses={403: {"description": "Not the post's author"}, 404: {"description": "Post not found"}},
)
async def update_post(post_id: str, body: PostUpdate, author: CurrentAuthorDep, content: ContentServiceDep) -> Post:
    return await content.update_post(author, post_id, body)


@router.delete(
    "/{post_id}",
    response_model=Acknowledgement,
    summary="Delete Post",
    responses={403: {"description": "Not the post's author"}, 404: {"description": "Post not found"}},
)
async def delete_post(post_id: str, author: CurrentAuthorDep, content: ContentServiceDep) -> Acknowledgement:
    await content.delete_post(author, post_id)
    return Acknowledgement(detail="Post deleted")
