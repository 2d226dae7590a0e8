"""Execution of compiled ledger queries."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Session

from salestracker.core.database import run_with_retry
from salestracker.items.models import LedgerEntry
from salestracker.query.builder import QueryCompiler, group_expression
from salestracker.query.schemas import AnalyticsFilter, CompiledQuery, ListingFilter
from salestracker.query.statistics import ZERO, Summary, quantize_average, summarize

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # percentile_cont yields double precision; go through str to keep the printed digits
    return Decimal(str(value))


def _summary_from_row(row) -> Summary:
    return Summary(
        count=int(row.count or 0),
        total_sum=_to_decimal(row.total_sum),
        avg=quantize_average(_to_decimal(row.avg)),
        median=_to_decimal(row.median),
        p90=_to_decimal(row.p90),
    )


class _Engine:
    def __init__(self, db: Session, compiler: QueryCompiler):
        self.db = db
        self.compiler = compiler

    def _execute(self, compiled: CompiledQuery) -> List[Any]:
        logger.debug("Executing %s query: %s params=%r", compiled.shape.value, compiled.sql, compiled.parameters)
        return run_with_retry(self.db, lambda: self.db.execute(compiled.statement).all())


class ListingEngine(_Engine):
    """Runs listing queries and maps rows into ledger entries."""

    def fetch(self, listing_filter: ListingFilter) -> Tuple[List[LedgerEntry], int]:
        """Return one page of entries plus the total number of matches.

        The total comes from the window count carried on every row, so it is
        0 whenever the page is empty.
        """
        compiled = self.compiler.compile_listing(listing_filter)
        rows = self._execute(compiled)

        entries = [row[0] for row in rows]
        total_count = int(rows[0].total_count) if rows else 0
        return entries, total_count


class AggregationEngine(_Engine):
    """Runs scalar and grouped statistics over a date-bounded set of entries."""

    def aggregate(self, analytics_filter: AnalyticsFilter) -> Summary:
        compiled = self.compiler.compile_scalar_aggregate(analytics_filter)
        rows = self._execute(compiled)

        if compiled.native:
            return _summary_from_row(rows[0])
        return summarize([row.amount for row in rows])

    def aggregate_grouped(self, analytics_filter: AnalyticsFilter) -> List[Tuple[str, Summary]]:
        """Statistics per group key, ordered ascending by key."""
        compiled = self.compiler.compile_grouped_aggregate(analytics_filter)
        rows = self._execute(compiled)

        if compiled.native:
            return [(row.group_key, _summary_from_row(row)) for row in rows]

        key_of = group_expression(compiled.group_key).key
        buckets: Dict[str, List[Decimal]] = defaultdict(list)
        for row in rows:
            buckets[key_of(row.date, row.category)].append(row.amount)

        return [(key, summarize(amounts)) for key, amounts in sorted(buckets.items())]
