from datetime import date
from decimal import Decimal
from typing import cast
from unittest.mock import MagicMock, create_autospec

import pytest

from book_catalog_api.domain import BookId
from book_catalog_api.errors import (
    InvalidPagination,
    InvalidQuery,
    StorageUnavailable,
    ValidationFailed,
)
from book_catalog_api.models import Book
from book_catalog_api.repositories.books_repository import BooksRepository
from book_catalog_api.schemas.book import BookCandidate
from book_catalog_api.services.book_service import BookService

TODAY = date(2024, 6, 1)


def make_repo() -> MagicMock:
    return cast(MagicMock, create_autospec(BooksRepository, instance=True, spec_set=True))


def make_service(repo: MagicMock) -> BookService:
    return BookService(repo, clock=lambda: TODAY)


def make_book(book_id: int = 1, title: str = "The Hobbit", author: str = "Tolkien") -> Book:
    return Book(
        id=book_id,
        title=title,
        author=author,
        publication_date=date(1937, 9, 21),
        price=Decimal("8.00"),
        title_folded=title.casefold(),
        author_folded=author.casefold(),
    )


def make_candidate(**overrides) -> BookCandidate:
    fields = {
        "title": "Harry Potter",
        "author": "Rowling",
        "publication_date": date(2000, 1, 1),
        "price": Decimal("10.00"),
    }
    fields.update(overrides)
    return BookCandidate(**fields)


def test_get_book_returns_schema():
    repo = make_repo()
    repo.get_by_id.return_value = make_book(book_id=1)

    svc = make_service(repo)
    result = svc.get_book(BookId(1))

    assert result is not None
    assert result.id == 1
    assert result.title == "The Hobbit"
    assert result.price == Decimal("8.00")
    repo.get_by_id.assert_called_once_with(1)


def test_get_book_returns_none():
    repo = make_repo()
    repo.get_by_id.return_value = None

    svc = make_service(repo)

    assert svc.get_book(BookId(999)) is None
    repo.get_by_id.assert_called_once_with(999)


@pytest.mark.parametrize(
    ("page", "page_size", "expected_offset"),
    [
        pytest.param(1, 10, 0, id="first-page"),
        pytest.param(2, 10, 10, id="second-page"),
        pytest.param(3, 7, 14, id="odd-size"),
    ],
)
def test_list_books_translates_page_to_offset(page: int, page_size: int, expected_offset: int):
    repo = make_repo()
    repo.list_books.return_value = [make_book()]

    svc = make_service(repo)
    result = svc.list_books(page=page, page_size=page_size)

    assert [b.id for b in result] == [1]
    repo.list_books.assert_called_once_with(limit=page_size, offset=expected_offset)


@pytest.mark.parametrize(("page", "page_size"), [(0, 10), (-1, 5), (1, 0), (1, -10)])
def test_list_books_rejects_non_positive_paging(page: int, page_size: int):
    repo = make_repo()
    svc = make_service(repo)

    with pytest.raises(InvalidPagination):
        svc.list_books(page=page, page_size=page_size)

    repo.list_books.assert_not_called()


def test_list_books_beyond_range_is_empty():
    repo = make_repo()
    repo.list_books.return_value = []

    svc = make_service(repo)

    assert svc.list_books(page=100, page_size=10) == []


def test_list_books_offset_past_store_range_is_empty():
    repo = make_repo()
    svc = make_service(repo)

    assert svc.list_books(page=10**18, page_size=100) == []
    repo.list_books.assert_not_called()


def test_list_books_clamps_huge_page_size():
    repo = make_repo()
    repo.list_books.return_value = []

    svc = make_service(repo)
    svc.list_books(page=1, page_size=10**20)

    repo.list_books.assert_called_once_with(limit=2**63 - 1, offset=0)


def test_create_book_persists_valid_candidate():
    repo = make_repo()
    repo.create.return_value = make_book(book_id=42, title="Harry Potter", author="Rowling")

    svc = make_service(repo)
    result = svc.create_book(make_candidate())

    assert result.id == 42
    repo.create.assert_called_once_with(
        title="Harry Potter",
        author="Rowling",
        publication_date=date(2000, 1, 1),
        price=Decimal("10.00"),
    )


def test_create_book_rejects_negative_price_without_writing():
    repo = make_repo()
    svc = make_service(repo)

    with pytest.raises(ValidationFailed) as exc_info:
        svc.create_book(make_candidate(price=Decimal("-1")))

    assert [v.field for v in exc_info.value.violations] == ["price"]
    repo.create.assert_not_called()


def test_create_book_uses_service_clock_for_future_dates():
    repo = make_repo()
    svc = make_service(repo)

    with pytest.raises(ValidationFailed) as exc_info:
        svc.create_book(make_candidate(publication_date=date(2024, 6, 2)))

    assert [v.field for v in exc_info.value.violations] == ["publication_date"]
    repo.create.assert_not_called()


def test_update_book_overwrites_existing_fields():
    repo = make_repo()
    existing = make_book(book_id=7)
    repo.get_by_id.return_value = existing
    repo.update.return_value = make_book(book_id=7, title="Harry Potter", author="Rowling")

    svc = make_service(repo)
    result = svc.update_book(BookId(7), make_candidate())

    assert result is not None
    assert result.id == 7
    repo.update.assert_called_once_with(
        existing,
        title="Harry Potter",
        author="Rowling",
        publication_date=date(2000, 1, 1),
        price=Decimal("10.00"),
    )


def test_update_book_returns_none_for_unknown_id():
    repo = make_repo()
    repo.get_by_id.return_value = None

    svc = make_service(repo)

    assert svc.update_book(BookId(999), make_candidate()) is None
    repo.update.assert_not_called()


def test_update_book_reports_validation_before_lookup():
    repo = make_repo()
    repo.get_by_id.return_value = None

    svc = make_service(repo)

    with pytest.raises(ValidationFailed):
        svc.update_book(BookId(999), make_candidate(title="", author=""))

    repo.get_by_id.assert_not_called()
    repo.update.assert_not_called()


def test_delete_book_removes_existing():
    repo = make_repo()
    existing = make_book(book_id=3)
    repo.get_by_id.return_value = existing

    svc = make_service(repo)

    assert svc.delete_book(BookId(3)) is True
    repo.delete.assert_called_once_with(existing)


def test_delete_book_returns_false_for_unknown_id():
    repo = make_repo()
    repo.get_by_id.return_value = None

    svc = make_service(repo)

    assert svc.delete_book(BookId(404)) is False
    repo.delete.assert_not_called()


@pytest.mark.parametrize("query", [None, "", "   ", "\t\n"])
def test_search_books_rejects_blank_query(query: str | None):
    repo = make_repo()
    svc = make_service(repo)

    with pytest.raises(InvalidQuery):
        svc.search_books(query)

    repo.search.assert_not_called()


def test_search_books_folds_query_before_searching():
    repo = make_repo()
    repo.search.return_value = [make_book(title="Harry Potter", author="Rowling")]

    svc = make_service(repo)
    result = svc.search_books("ROWLING")

    assert [b.author for b in result] == ["Rowling"]
    repo.search.assert_called_once_with("rowling")


def test_search_books_strips_surrounding_whitespace():
    repo = make_repo()
    repo.search.return_value = []

    svc = make_service(repo)
    svc.search_books("  Pot\t")

    repo.search.assert_called_once_with("pot")


def test_storage_failures_propagate_unchanged():
    repo = make_repo()
    repo.get_by_id.side_effect = StorageUnavailable("down")

    svc = make_service(repo)

    with pytest.raises(StorageUnavailable):
        svc.delete_book(BookId(1))
