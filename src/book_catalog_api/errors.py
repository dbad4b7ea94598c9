"""Error kinds raised by the catalog service.

A missing book is not an error: lookups return ``None`` and removals return
``False``. Everything below is raised and left to the HTTP layer to map onto
a response.
"""

from collections.abc import Sequence

from book_catalog_api.validation import Violation


class CatalogError(Exception):
    """Base class for catalog failures."""


class ValidationFailed(CatalogError):
    """A candidate book broke one or more field rules."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations)
        super().__init__(f"Validation failed for: {fields}")


class InvalidQuery(CatalogError):
    """A search was requested with an empty or blank query."""

    def __init__(self, message: str = "Query must not be empty") -> None:
        super().__init__(message)


class InvalidPagination(CatalogError):
    """A listing was requested with a non-positive page or page size."""

    def __init__(self, message: str = "Page and pageSize must be positive integers") -> None:
        super().__init__(message)


class StorageUnavailable(CatalogError):
    """The record store could not complete an operation."""
