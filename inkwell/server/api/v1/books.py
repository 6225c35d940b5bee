"""
Book Endpoints.

Books are published in two steps: upload the file (and optionally a cover),
then create the book with the returned URLs.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from inkwell.core.models.domain import Book, ContentFilter
from inkwell.core.models.io import Acknowledgement, BookCreate, BookUpdate, UploadResult
from inkwell.server.services.deps import ContentServiceDep, CurrentAuthorDep

router = APIRouter(tags=["books"])


@router.get(
    "",
    response_model=List[Book],
    summary="List Books",
    description="Books with their author name and like count, optionally filtered and searched.",
)
async def list_books(
    content: ContentServiceDep,
    author_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Substring of the title or description"),
    content_filter: ContentFilter = Query(default=ContentFilter.all, alias="filter"),
) -> List[Book]:
    return await content.list_books(author_id, search, content_filter)


@router.post(
    "/file",
    response_model=UploadResult,
    summary="Upload Book File",
)
async def upload_book_file(
    author: CurrentAuthorDep, content: ContentServiceDep, file: UploadFile = File(...)
) -> UploadResult:
    data = await file.read()
    return UploadResult(url=await content.upload_book_file(author, file.filename or "book", file.content_type, data))


@router.post(
    "/cover",
    response_model=UploadResult,
    summary="Upload Book Cover",
    description="Upload a cover image. Only images below the configured size are accepted.",
    responses={422: {"description": "Not an image, or too large"}},
)
async def upload_book_cover(
    author: CurrentAuthorDep, content: ContentServiceDep, file: UploadFile = File(...)
) -> UploadResult:
    data = await file.read()
    return UploadResult(url=await content.upload_cover(author, file.filename or "cover", file.content_type, data))


@router.get(
    "/{book_id}",
    response_model=Book,
    summary="Get Book",
    responses={404: {"description": "Book not found"}},
)
async def get_book(book_id: str, content: ContentServiceDep) -> Book:
    return await content.get_book(book_id)


@router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    summary="Publish Book",
    description="Create a book from an uploaded file. The price is stored as 0 unless the book is paid.",
    responses={422: {"description": "Book file not uploaded"}},
)
async def create_book(body: BookCreate, author: CurrentAuthorDep, content: ContentServiceDep) -> Book:
    return await content.create_book(author, body)


@router.patch(
    "/{book_id}",
    response_model=Book,
    summary="Edit Book",
    responses={403: {"description": "Not the book's author"}, 404: {"description": "Book not found"}},
)
async def update_book(book_id: str, body: BookUpdate, author: CurrentAuthorDep, content: ContentServiceDep) -> Book:
    return await content.update_book(author, book_id, body)


@router.delete(
    "/{book_id}",
    response_model=Acknowledgement,
    summary="Delete Book",
    responses={403: {"description": "Not the book's author"}, 404: {"description": "Book not found"}},
)
async def delete_book(book_id: str, author: CurrentAuthorDep, content: ContentServiceDep) -> Acknowledgement:
    await content.delete_book(author, book_id)
    return Acknowledgement(detail="Book deleted")
