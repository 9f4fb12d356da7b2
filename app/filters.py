"""Query-string parsing for the transaction endpoints.

Every endpoint turns its raw ``month`` / ``search`` parameters into a
``TransactionFilter`` before touching the database, so an unknown month name
is rejected in one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from app.exceptions import InvalidParameter

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def parse_month(month: Optional[str]) -> Optional[int]:
    """Map an English month name to 1-12. Empty/None means no month filter."""
    if not month:
        return None
    try:
        return MONTHS.index(month) + 1
    except ValueError:
        raise InvalidParameter("Invalid month value") from None


def parse_price(text: str) -> Optional[float]:
    """Parse search text as a price, or None when it is not a finite number."""
    # float() takes digit separators ("1_000"); a typed price never has them
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class TransactionFilter:
    month_index: Optional[int] = None
    search_text: Optional[str] = None
    price_equals: Optional[float] = None

    @classmethod
    def parse(cls, month: Optional[str] = None, search: Optional[str] = None) -> "TransactionFilter":
        month_index = parse_month(month)

        search_text = (search or "").strip() or None
        price_equals = parse_price(search_text) if search_text else None

        return cls(month_index=month_index, search_text=search_text, price_equals=price_equals)

    def require_month(self) -> "TransactionFilter":
        """Reject filters without a month (statistics are always per-month)."""
        if self.month_index is None:
            raise InvalidParameter("Invalid month value")
        return self

    @property
    def month_name(self) -> Optional[str]:
        return MONTHS[self.month_index - 1] if self.month_index else None
