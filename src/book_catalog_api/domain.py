import typing
from datetime import date
from decimal import Decimal

BookId = typing.NewType("BookId", int)

MIN_TEXT_LENGTH = 2

# A publication date equal to this value is treated as never having been set.
UNSET_DATE = date.min

# Largest value a BIGINT id, LIMIT or OFFSET can carry.
MAX_STORE_INT = 2**63 - 1

# Matches the NUMERIC(12, 2) price column.
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")
