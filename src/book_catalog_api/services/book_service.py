import logging
from collections.abc import Callable
from datetime import date

from book_catalog_api.domain import MAX_STORE_INT, BookId
from book_catalog_api.errors import InvalidPagination, InvalidQuery, ValidationFailed
from book_catalog_api.repositories.books_repository import BooksRepository, fold
from book_catalog_api.schemas.book import BookCandidate, BookRead
from book_catalog_api.validation import utc_today, validate

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, repo: BooksRepository, clock: Callable[[], date] = utc_today) -> None:
        self.repo = repo
        self.clock = clock

    def _validate(self, candidate: BookCandidate) -> None:
        violations = validate(candidate, today=self.clock())
        if violations:
            logger.warning(
                "Rejected book candidate",
                extra={"violations": [v.field for v in violations]},
            )
            raise ValidationFailed(violations)

    def list_books(self, page: int = 1, page_size: int = 10) -> list[BookRead]:
        if page < 1 or page_size < 1:
            raise InvalidPagination()

        offset = (page - 1) * page_size
        if offset > MAX_STORE_INT:
            return []

        items = self.repo.list_books(limit=min(page_size, MAX_STORE_INT), offset=offset)
        return [BookRead.model_validate(item) for item in items]

    def get_book(self, book_id: BookId) -> BookRead | None:
        book = self.repo.get_by_id(book_id)
        if not book:
            return None
        return BookRead.model_validate(book)

    def create_book(self, candidate: BookCandidate) -> BookRead:
        self._validate(candidate)

        book = self.repo.create(
            title=candidate.title,
            author=candidate.author,
            publication_date=candidate.publication_date,
            price=candidate.price,
        )
        logger.info("Created book", extra={"book_id": book.id})
        return BookRead.model_validate(book)

    def update_book(self, book_id: BookId, candidate: BookCandidate) -> BookRead | None:
        # Bad input is reported even when the target does not exist.
        self._validate(candidate)

        book = self.repo.get_by_id(book_id)
        if not book:
            return None

        updated = self.repo.update(
            book,
            title=candidate.title,
            author=candidate.author,
            publication_date=candidate.publication_date,
            price=candidate.price,
        )
        logger.info("Updated book", extra={"book_id": book_id})
        return BookRead.model_validate(updated)

    def delete_book(self, book_id: BookId) -> bool:
        book = self.repo.get_by_id(book_id)
        if not book:
            return False

        self.repo.delete(book)
        logger.info("Deleted book", extra={"book_id": book_id})
        return True

    def search_books(self, query: str | None) -> list[BookRead]:
        if query is None or not query.strip():
            raise InvalidQuery()

        items = self.repo.search(fold(query.strip()))
        return [BookRead.model_validate(item) for item in items]
