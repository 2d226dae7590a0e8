"""Semantic validation for filters, entry payloads and identifiers."""

import re
import uuid
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from salestracker.core.exceptions import (
    InvalidAmount,
    InvalidCategory,
    InvalidDate,
    InvalidDateRange,
    InvalidDescription,
    InvalidGroupKey,
    InvalidIdentifier,
    InvalidKind,
    InvalidOrder,
    InvalidSortKey,
    LedgerValidationError,
)
from salestracker.query.schemas import (
    AnalyticsFilter,
    EntryKind,
    GroupKey,
    ListingFilter,
    RawAnalyticsFilter,
    RawListingFilter,
    SortKey,
    SortOrder,
)

E = TypeVar("E", bound=Enum)

MAX_CATEGORY_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000
# Numeric(12, 2): ten integer digits, two fractional
MAX_AMOUNT = Decimal("9999999999.99")
CENT = Decimal("0.01")

# Accepted identifier shapes; uuid.UUID alone also accepts stray hyphens anywhere
_HYPHENATED = "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
UUID_SHAPE = re.compile(
    "|".join(
        [
            _HYPHENATED,
            "urn:uuid:" + _HYPHENATED,
            r"\{" + _HYPHENATED + r"\}",
            "[0-9a-f]{32}",
        ]
    ),
    re.IGNORECASE,
)


def _blank(value: Optional[str]) -> bool:
    return value is None or value == ""


def _parse_enum(enum_cls: Type[E], value: Optional[str], error: Type[LedgerValidationError]) -> Optional[E]:
    if _blank(value):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise error() from None


class LedgerValidator:
    """
    Validates caller input before any query is compiled.

    The validator holds no state; construct one per use or share it freely.
    Checks run in a fixed order so the first failing rule determines the
    reported error.
    """

    # ===== FILTERS =====

    def validate_listing(self, raw: RawListingFilter) -> ListingFilter:
        kind = _parse_enum(EntryKind, raw.kind, InvalidKind)
        sort_by = _parse_enum(SortKey, raw.sort_by, InvalidSortKey)
        order = _parse_enum(SortOrder, raw.order, InvalidOrder) or SortOrder.DESC

        if raw.date_from is not None and raw.date_to is not None and raw.date_from > raw.date_to:
            raise InvalidDateRange()

        return ListingFilter(
            date_from=raw.date_from,
            date_to=raw.date_to,
            category=None if _blank(raw.category) else raw.category,
            kind=kind,
            sort_by=sort_by,
            order=order,
            limit=raw.limit,
            offset=raw.offset,
            no_limit=raw.no_limit,
        )

    def validate_analytics(self, raw: RawAnalyticsFilter) -> AnalyticsFilter:
        if raw.date_from is None or raw.date_to is None:
            raise InvalidDate("'from' and 'to' dates are required")
        if raw.date_from > raw.date_to:
            raise InvalidDateRange()

        group_by = _parse_enum(GroupKey, raw.group_by, InvalidGroupKey)
        kind = _parse_enum(EntryKind, raw.kind, InvalidKind)

        return AnalyticsFilter(
            date_from=raw.date_from,
            date_to=raw.date_to,
            kind=kind,
            group_by=group_by,
        )

    # ===== ENTRY PAYLOADS =====

    def validate_entry(
        self,
        kind: Optional[str],
        amount: Any,
        category: Optional[str],
        description: Optional[str],
        entry_date: Optional[date],
    ) -> EntryKind:
        """Check a create/replace payload and return its parsed kind."""
        parsed_kind = _parse_enum(EntryKind, kind, InvalidKind)
        if parsed_kind is None:
            raise InvalidKind()

        self._validate_amount(amount)

        if category is None or not category.strip():
            raise InvalidCategory()
        if len(category) > MAX_CATEGORY_LENGTH:
            raise InvalidCategory(f"category must be at most {MAX_CATEGORY_LENGTH} characters")

        if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidDescription()

        if entry_date is None:
            raise InvalidDate()

        return parsed_kind

    def _validate_amount(self, amount: Any) -> None:
        if amount is None or isinstance(amount, bool):
            raise InvalidAmount()
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            raise InvalidAmount() from None

        if not value.is_finite() or value <= 0:
            raise InvalidAmount()
        if value > MAX_AMOUNT:
            raise InvalidAmount(f"amount must not exceed {MAX_AMOUNT}")
        if value != value.quantize(CENT):
            raise InvalidAmount("amount must have at most two decimal places")

    # ===== IDENTIFIERS =====

    def parse_identifier(self, value: Any) -> str:
        """Return the canonical lowercase UUID string or raise InvalidIdentifier."""
        if isinstance(value, uuid.UUID):
            return str(value)
        if not isinstance(value, str) or UUID_SHAPE.fullmatch(value) is None:
            raise InvalidIdentifier()
        try:
            return str(uuid.UUID(value))
        except ValueError:
            raise InvalidIdentifier() from None
