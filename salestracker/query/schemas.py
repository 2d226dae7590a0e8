"""
Filter and query types for ledger listings and analytics.

Raw filters carry untrusted primitives straight from the HTTP layer; the
validated counterparts carry enum members only and are the sole input the
PredicateBuilder and QueryCompiler accept.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, List, Optional

from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement


class EntryKind(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


class SortKey(str, Enum):
    """Sortable listing dimensions."""

    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"
    TYPE = "type"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GroupKey(str, Enum):
    """Partitioning dimensions for grouped analytics."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    CATEGORY = "category"


class QueryShape(str, Enum):
    LISTING = "listing"
    SCALAR = "scalar"
    GROUPED = "grouped"


# ===== RAW (UNVALIDATED) FILTERS =====


@dataclass(frozen=True)
class RawListingFilter:
    """Listing criteria as received from the caller."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    category: Optional[str] = None
    kind: Optional[str] = None
    sort_by: Optional[str] = None
    order: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    no_limit: bool = False


@dataclass(frozen=True)
class RawAnalyticsFilter:
    """Analytics criteria as received from the caller."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    kind: Optional[str] = None
    group_by: Optional[str] = None


# ===== VALIDATED FILTERS =====


@dataclass(frozen=True)
class ListingFilter:
    """Validated listing criteria."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None
    category: Optional[str] = None
    kind: Optional[EntryKind] = None
    sort_by: Optional[SortKey] = None
    order: SortOrder = SortOrder.DESC
    limit: Optional[int] = None
    offset: Optional[int] = None
    no_limit: bool = False


@dataclass(frozen=True)
class AnalyticsFilter:
    """Validated analytics criteria. Both date bounds are always set."""

    date_from: date
    date_to: date
    kind: Optional[EntryKind] = None
    group_by: Optional[GroupKey] = None


# ===== COMPILATION ARTIFACTS =====


@dataclass(frozen=True)
class Predicate:
    """One parameterized condition of a WHERE clause."""

    name: str
    fragment: ColumnElement
    parameter: Any


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int = 0


@dataclass
class CompiledQuery:
    """A ready-to-execute statement plus the metadata needed to read it back."""

    statement: Select
    sql: str
    parameters: List[Any]
    shape: QueryShape
    native: bool = True
    pagination: Optional[Pagination] = None
    group_key: Optional[GroupKey] = None
    predicates: List[Predicate] = field(default_factory=list)
