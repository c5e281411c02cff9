"""
Query View
Filtered, sorted read-only projection of the ledger.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import OrderStatus


class SortKey(Enum):
    SEQUENCE_NUMBER = "sequence_number"
    CREATED_DATE = "created_date"


@dataclass(frozen=True)
class QueryFilters:
    """All set filters must match (logical AND). Blank strings are ignored."""
    client_name_contains: Optional[str] = None
    sequence_number_contains: Optional[str] = None
    status_equals: Optional[OrderStatus] = None

    def matches(self, record):
        client = (self.client_name_contains or "").strip().lower()
        if client and client not in record.client_name.lower():
            return False
        number = (self.sequence_number_contains or "").strip()
        if number and number not in str(record.sequence_number):
            return False
        if self.status_equals is not None and record.status is not OrderStatus.parse(self.status_equals):
            return False
        return True


NO_FILTERS = QueryFilters()


class QueryView:
    """Recomputes the projection on every call; holds no state besides its sort key"""

    def __init__(self, sort_key=SortKey.SEQUENCE_NUMBER):
        self.sort_key = SortKey(sort_key)

    def compute(self, ledger, filters=NO_FILTERS):
        matched = [r for r in ledger if filters.matches(r)]
        if self.sort_key is SortKey.CREATED_DATE:
            # sorted() is stable, so same-day orders keep ledger order
            matched = sorted(matched, key=lambda r: r.created_date, reverse=True)
        else:
            matched = sorted(matched, key=lambda r: r.sequence_number, reverse=True)
        return tuple(matched)
