from book_catalog_api.schemas.book import (
    BookCandidate,
    BookRead,
    ValidationErrorResponse,
    ViolationRead,
)

__all__ = [
    "BookCandidate",
    "BookRead",
    "ValidationErrorResponse",
    "ViolationRead",
]
