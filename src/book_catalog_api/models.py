from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from book_catalog_api.database import Base


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    publication_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # casefolded copies, written alongside title/author and used only by search
    title_folded: Mapped[str] = mapped_column(Text, nullable=False)
    author_folded: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("ix_books_author_title", "author", "title"),
        {"sqlite_autoincrement": True},
    )
