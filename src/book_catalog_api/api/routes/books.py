from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from book_catalog_api.config import settings
from book_catalog_api.dependencies.books import get_book_service
from book_catalog_api.domain import BookId
from book_catalog_api.schemas.book import BookCandidate, BookRead, ValidationErrorResponse
from book_catalog_api.services.book_service import BookService

router = APIRouter(prefix="/api/books", tags=["books"])

_NOT_FOUND = {404: {"description": "Book not found"}}
_INVALID = {400: {"model": ValidationErrorResponse, "description": "Invalid book fields"}}


def _not_found(book_id: BookId) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Book with id {book_id} not found",
    )


@router.get(
    "",
    response_model=list[BookRead],
    responses={400: {"description": "Page or pageSize is not a positive integer"}},
)
def list_books(
    svc: Annotated[BookService, Depends(get_book_service)],
    page: int = Query(1, description="Page number (1-based)"),
    page_size: int = Query(
        settings.default_page_size,
        alias="pageSize",
        description="Items per page",
    ),
) -> list[BookRead]:
    """Retrieve a page of books ordered by author, then title."""
    return svc.list_books(page=page, page_size=page_size)


@router.get(
    "/search",
    response_model=list[BookRead],
    responses={400: {"description": "Query is empty"}},
)
def search_books(
    svc: Annotated[BookService, Depends(get_book_service)],
    query: str | None = Query(None, description="Text to find in titles or authors"),
) -> list[BookRead]:
    """Find books whose title or author contains the query, ignoring case."""
    return svc.search_books(query)


@router.get("/{book_id}", response_model=BookRead, responses=_NOT_FOUND)
def get_book_by_id(
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    """Retrieve a single book."""
    book = svc.get_book(book_id)
    if not book:
        raise _not_found(book_id)
    return book


@router.post(
    "",
    response_model=BookRead,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
def create_book(
    candidate: BookCandidate,
    response: Response,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> BookRead:
    """Add a book to the catalog."""
    book = svc.create_book(candidate)
    response.headers["Location"] = router.url_path_for("get_book_by_id", book_id=str(book.id))
    return book


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_INVALID, **_NOT_FOUND},
)
def update_book(
    book_id: BookId,
    candidate: BookCandidate,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Response:
    """Replace the fields of an existing book."""
    if svc.update_book(book_id, candidate) is None:
        raise _not_found(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_book(
    book_id: BookId,
    svc: Annotated[BookService, Depends(get_book_service)],
) -> Response:
    """Remove a book from the catalog."""
    if not svc.delete_book(book_id):
        raise _not_found(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
