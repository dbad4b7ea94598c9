import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from book_catalog_api.domain import MAX_STORE_INT, BookId
from book_catalog_api.errors import StorageUnavailable
from book_catalog_api.models import Book

logger = logging.getLogger(__name__)

_CATALOG_ORDER = (Book.author.asc(), Book.title.asc(), Book.id.asc())


def fold(text: str) -> str:
    """Case-fold text the same way for stored values and search queries."""
    return text.casefold()


class BooksRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _storage(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Book store failed during %s", operation)
            raise StorageUnavailable(f"Book store unavailable during {operation}") from exc

    def get_by_id(self, book_id: BookId) -> Book | None:
        if abs(book_id) > MAX_STORE_INT:
            return None
        with self._storage("get_by_id"):
            return self.session.get(Book, book_id)

    def list_books(self, limit: int = 10, offset: int = 0) -> Sequence[Book]:
        """
        Returns one page of books ordered by author, then title.
        """
        stmt = select(Book).order_by(*_CATALOG_ORDER).limit(limit).offset(offset)
        with self._storage("list_books"):
            return self.session.scalars(stmt).all()

    def search(self, folded_query: str) -> Sequence[Book]:
        """
        Returns books whose folded title or folded author contains the query.
        The query must already be folded with :func:`fold`.
        """
        stmt = (
            select(Book)
            .where(
                or_(
                    Book.title_folded.contains(folded_query, autoescape=True),
                    Book.author_folded.contains(folded_query, autoescape=True),
                )
            )
            .order_by(*_CATALOG_ORDER)
        )
        with self._storage("search"):
            return self.session.scalars(stmt).all()

    def create(self, title: str, author: str, publication_date: date, price: Decimal) -> Book:
        book = Book(
            title=title,
            author=author,
            publication_date=publication_date,
            price=price,
            title_folded=fold(title),
            author_folded=fold(author),
        )
        with self._storage("create"):
            self.session.add(book)
            self.session.commit()
            self.session.refresh(book)

        return book

    def update(
        self, book: Book, title: str, author: str, publication_date: date, price: Decimal
    ) -> Book:
        book.title = title
        book.author = author
        book.publication_date = publication_date
        book.price = price
        book.title_folded = fold(title)
        book.author_folded = fold(author)

        with self._storage("update"):
            self.session.commit()
            self.session.refresh(book)

        return book

    def delete(self, book: Book) -> None:
        with self._storage("delete"):
            self.session.delete(book)
            self.session.commit()
