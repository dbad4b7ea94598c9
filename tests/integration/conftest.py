from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from book_catalog_api.models import Book
from book_catalog_api.repositories.books_repository import fold


class DataFactory:
    def __init__(self, session: Session):
        self.session = session

    def create_book(
        self,
        title: str = "Test Book",
        author: str = "Test Author",
        publication_date: date = date(2000, 1, 1),
        price: Decimal = Decimal("10.00"),
    ) -> Book:
        b = Book(
            title=title,
            author=author,
            publication_date=publication_date,
            price=price,
            title_folded=fold(title),
            author_folded=fold(author),
        )
        self.session.add(b)
        return b

    def create_books(self, count: int, author: str = "Author") -> list[Book]:
        return [self.create_book(title=f"Book {i:02d}", author=author) for i in range(1, count + 1)]

    def commit(self):
        self.session.commit()


@pytest.fixture
def test_data(db_session: Session) -> DataFactory:
    return DataFactory(db_session)


@pytest.fixture
def rowling_and_tolkien(test_data: DataFactory) -> list[Book]:
    potter = test_data.create_book(
        title="Harry Potter",
        author="Rowling",
        publication_date=date(2000, 1, 1),
        price=Decimal("10.00"),
    )
    hobbit = test_data.create_book(
        title="The Hobbit",
        author="Tolkien",
        publication_date=date(1937, 1, 1),
        price=Decimal("8.00"),
    )
    test_data.commit()
    return [potter, hobbit]
