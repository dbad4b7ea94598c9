from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from book_catalog_api.domain import BookId

# Prices travel as JSON numbers, not the string form pydantic uses for Decimal.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class BookBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookCandidate(BookBase):
    """Unvalidated field values submitted for create or update.

    Every field is optional at the schema level so that missing or null values
    reach the catalog's own rules and are reported alongside other violations.
    """

    title: str | None = Field(default=None, examples=["The Hobbit"])
    author: str | None = Field(default=None, examples=["J. R. R. Tolkien"])
    publication_date: date | None = Field(default=None, examples=["1937-09-21"])
    price: Price | None = Field(default=Decimal("0"), examples=[8.99])


class BookRead(BookBase):
    id: BookId
    title: str
    author: str
    publication_date: date
    price: Price

    model_config = ConfigDict(from_attributes=True)


class ViolationRead(BaseModel):
    field: str = Field(description="Name of the rejected field", examples=["price"])
    reason: str = Field(
        description="Why the value was rejected",
        examples=["The price must be greater than or equal to 0"],
    )


class ValidationErrorResponse(BaseModel):
    detail: str
    violations: list[ViolationRead]
