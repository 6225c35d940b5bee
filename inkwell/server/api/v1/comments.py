"""
Comment Endpoints.

Comments on author pages, and a Server-Sent Events stream that pushes the
refreshed comment list whenever a new comment arrives.
"""

import json
from typing import List

from fastapi import APIRouter, Request, status
from pydantic import TypeAdapter
from sse_starlette.sse import EventSourceResponse

from inkwell.core.errors import InkwellError
from inkwell.core.logging_config import get_logger
from inkwell.core.models.domain import Comment
from inkwell.core.models.io import Acknowledgement, CommentCreate
from inkwell.server.services.deps import CommentServiceDep, CurrentUserDep

logger = get_logger(__name__)
router = APIRouter(tags=["comments"])

_comment_list = TypeAdapter(List[Comment])


def serialize_comments(comments: List[Comment]) -> str:
    """Serialize a comment list to a JSON string for an SSE ``data`` field."""
    return _comment_list.dump_json(comments).decode()


@router.get(
    "/{author_id}",
    response_model=List[Comment],
    summary="List Comments",
    description="Comments on an author's page, newest first.",
)
async def list_comments(author_id: str, comments: CommentServiceDep) -> List[Comment]:
    return await comments.list_comments(author_id)


@router.post(
    "/{author_id}",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    summary="Add Comment",
    description="Post a comment on an author's page as the signed-in user.",
    responses={422: {"description": "Empty comment"}},
)
async def add_comment(
    author_id: str, body: CommentCreate, user: CurrentUserDep, comments: CommentServiceDep
) -> Comment:
    return await comments.add_comment(user, author_id, body.content)


@router.delete(
    "/item/{comment_id}",
    response_model=Acknowledgement,
    summary="Delete Comment",
    description="Delete a comment. Allowed to its writer and to the author whose page it is on.",
    responses={403: {"description": "Not the writer or the author"}, 404: {"description": "Comment not found"}},
)
async def delete_comment(comment_id: str, user: CurrentUserDep, comments: CommentServiceDep) -> Acknowledgement:
    await comments.delete_comment(user, comment_id)
    return Acknowledgement(detail="Comment deleted")


@router.get(
    "/{author_id}/stream",
    summary="Stream Comments",
    description="Server-Sent Events stream of an author's comment list.",
    response_description="A stream of `comments` events, each carrying the full list.",
)
async def stream_comments(author_id: str, request: Request, comments: CommentServiceDep):
    """
    Stream the comment list of an author.

    The current list is sent on connect and again after every new comment.
    The realtime subscription is released when the client disconnects.
    """

    async def event_generator():
        stream = comments.stream_comments(author_id)
        try:
            async for snapshot in stream:
                if await request.is_disconnected():
                    logger.info(f"Client disconnected from comment stream of {author_id}")
                    break
                yield {"event": "comments", "data": serialize_comments(snapshot)}
        except InkwellError as e:
            logger.error(f"Error in comment stream for {author_id}: {e.message}")
            yield {"event": "error", "data": json.dumps(e.to_dict())}
        finally:
            await stream.aclose()

    return EventSourceResponse(event_generator())
