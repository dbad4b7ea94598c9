"""Field rules a book must satisfy before it is written to the store.

Every rule is a plain function returning an error message or ``None``.
:func:`validate` runs all of them and collects one :class:`Violation` per
failing field so callers can report the whole set at once.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal

from book_catalog_api.domain import MAX_PRICE, MIN_TEXT_LENGTH, PRICE_QUANTUM, UNSET_DATE
from book_catalog_api.schemas.book import BookCandidate


@dataclass(frozen=True)
class Violation:
    field: str
    reason: str


def utc_today() -> date:
    return datetime.now(UTC).date()


def check_text(value: str | None, label: str) -> str | None:
    text = (value or "").strip()
    if not text:
        return f"The {label} field is required"
    if len(text) < MIN_TEXT_LENGTH:
        return f"The {label} must be at least {MIN_TEXT_LENGTH} characters long"
    return None


def check_publication_date(value: date | None, today: date) -> str | None:
    if isinstance(value, datetime):
        value = value.date()
    if value is None or value == UNSET_DATE:
        return "The publication date is required"
    if value > today:
        return "The publication date must not be in the future"
    return None


def check_price(value: Decimal | None) -> str | None:
    if value is None:
        return "The price field is required"
    if not value.is_finite():
        return "The price must be a finite number"
    if value < 0:
        return "The price must be greater than or equal to 0"
    if value > MAX_PRICE:
        return f"The price must not exceed {MAX_PRICE}"
    if value != value.quantize(PRICE_QUANTUM):
        return "The price must have at most 2 decimal places"
    return None


def validate(candidate: BookCandidate, today: date | None = None) -> list[Violation]:
    """Return every rule the candidate breaks; an empty list means it is valid.

    ``today`` is read once per call (UTC) unless supplied, so all date checks
    in a single validation agree on the same reference day.
    """
    if today is None:
        today = utc_today()

    results = [
        ("title", check_text(candidate.title, "title")),
        ("author", check_text(candidate.author, "author")),
        ("publication_date", check_publication_date(candidate.publication_date, today)),
        ("price", check_price(candidate.price)),
    ]
    return [Violation(field=field, reason=reason) for field, reason in results if reason]
