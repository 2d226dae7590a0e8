"""
Predicate building and query compilation for ledger listings and analytics.

Every user-supplied value reaches the database as a bound parameter. Sort
columns and grouping expressions come only from the allow-lists below, so
query text never contains caller input.
"""

import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, NamedTuple, Optional

from sqlalchemy import Date, String, cast, func, select
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from salestracker.core.exceptions import QueryCompilationError
from salestracker.items.models import LedgerEntry
from salestracker.query.schemas import (
    AnalyticsFilter,
    CompiledQuery,
    GroupKey,
    ListingFilter,
    Pagination,
    Predicate,
    QueryShape,
    SortKey,
    SortOrder,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 1000
# Largest OFFSET a signed 64-bit bind parameter holds
MAX_OFFSET = 2**63 - 1

MEDIAN = 0.5
P90 = 0.9

# Dialects with PERCENTILE_CONT ... WITHIN GROUP; everything else aggregates in process
NATIVE_PERCENTILE_DIALECTS = frozenset({"postgresql"})


# ===== ALLOW-LISTS =====

SORT_COLUMNS: Dict[SortKey, ColumnElement] = {
    SortKey.DATE: LedgerEntry.date,
    SortKey.AMOUNT: LedgerEntry.amount,
    SortKey.CATEGORY: LedgerEntry.category,
    SortKey.TYPE: LedgerEntry.type,
}


def _week_start(value: date) -> date:
    return value - timedelta(days=value.weekday())


class GroupExpression(NamedTuple):
    """How one grouping key is computed in SQL and in process."""

    sql: Callable[[], ColumnElement]
    key: Callable[[date, str], str]


GROUP_EXPRESSIONS: Dict[GroupKey, GroupExpression] = {
    GroupKey.DAY: GroupExpression(
        sql=lambda: cast(LedgerEntry.date, String),
        key=lambda d, c: d.isoformat(),
    ),
    GroupKey.WEEK: GroupExpression(
        sql=lambda: cast(cast(func.date_trunc("week", LedgerEntry.date), Date), String),
        key=lambda d, c: _week_start(d).isoformat(),
    ),
    GroupKey.MONTH: GroupExpression(
        sql=lambda: cast(cast(func.date_trunc("month", LedgerEntry.date), Date), String),
        key=lambda d, c: d.replace(day=1).isoformat(),
    ),
    GroupKey.CATEGORY: GroupExpression(
        sql=lambda: LedgerEntry.category,
        key=lambda d, c: c,
    ),
}


def group_expression(group_by) -> GroupExpression:
    """Look up a grouping key; anything outside the allow-list is an internal error."""
    expression = GROUP_EXPRESSIONS.get(group_by) if group_by is not None else None
    if expression is None:
        raise QueryCompilationError(f"unsupported group_by: {group_by!r}")
    return expression


# ===== PREDICATES =====


class PredicateBuilder:
    """Turns validated filters into an ordered list of parameterized predicates."""

    def build_listing(self, listing_filter: ListingFilter) -> List[Predicate]:
        predicates = []
        if listing_filter.kind is not None:
            predicates.append(self._kind(listing_filter.kind.value))
        if listing_filter.category is not None:
            predicates.append(
                Predicate("category", LedgerEntry.category == listing_filter.category, listing_filter.category)
            )
        if listing_filter.date_from is not None:
            predicates.append(self._date_from(listing_filter.date_from))
        if listing_filter.date_to is not None:
            predicates.append(self._date_to(listing_filter.date_to))
        return predicates

    def build_analytics(self, analytics_filter: AnalyticsFilter) -> List[Predicate]:
        predicates = [
            self._date_from(analytics_filter.date_from),
            self._date_to(analytics_filter.date_to),
        ]
        if analytics_filter.kind is not None:
            predicates.append(self._kind(analytics_filter.kind.value))
        return predicates

    @staticmethod
    def _kind(value: str) -> Predicate:
        return Predicate("type", LedgerEntry.type == value, value)

    @staticmethod
    def _date_from(value: date) -> Predicate:
        return Predicate("date_from", LedgerEntry.date >= value, value)

    @staticmethod
    def _date_to(value: date) -> Predicate:
        return Predicate("date_to", LedgerEntry.date <= value, value)


# ===== COMPILER =====


class QueryCompiler:
    """
    Compiles validated filters into executable statements.

    The target dialect decides how percentiles are computed: natively via
    ``percentile_cont`` on PostgreSQL, otherwise by selecting the matching
    amounts ordered ascending so the engine can aggregate them in process.
    """

    def __init__(
        self,
        dialect: Dialect,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        predicate_builder: Optional[PredicateBuilder] = None,
    ):
        self.dialect = dialect
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.predicate_builder = predicate_builder or PredicateBuilder()

    @property
    def native_percentiles(self) -> bool:
        return self.dialect.name in NATIVE_PERCENTILE_DIALECTS

    # ----- listing -----

    def resolve_pagination(self, listing_filter: ListingFilter) -> Optional[Pagination]:
        """Effective LIMIT/OFFSET, or None when the listing is unbounded."""
        if listing_filter.no_limit:
            return None

        limit = listing_filter.limit
        if limit is None or limit <= 0 or limit > self.max_page_size:
            limit = self.default_page_size

        offset = listing_filter.offset if listing_filter.offset and listing_filter.offset > 0 else 0
        offset = min(offset, MAX_OFFSET)
        return Pagination(limit=limit, offset=offset)

    def compile_listing(self, listing_filter: ListingFilter) -> CompiledQuery:
        predicates = self.predicate_builder.build_listing(listing_filter)

        sort_column = SORT_COLUMNS.get(listing_filter.sort_by, LedgerEntry.date)
        ordering = sort_column.asc() if listing_filter.order == SortOrder.ASC else sort_column.desc()

        statement = (
            self._filtered(select(LedgerEntry, func.count().over().label("total_count")), predicates)
            .order_by(ordering)
        )

        parameters = [p.parameter for p in predicates]
        pagination = self.resolve_pagination(listing_filter)
        if pagination is not None:
            statement = statement.limit(pagination.limit)
            parameters.append(pagination.limit)
            if pagination.offset > 0:
                statement = statement.offset(pagination.offset)
                parameters.append(pagination.offset)

        return self._compiled(statement, parameters, QueryShape.LISTING, predicates, pagination=pagination)

    # ----- aggregation -----

    def compile_scalar_aggregate(self, analytics_filter: AnalyticsFilter) -> CompiledQuery:
        predicates = self.predicate_builder.build_analytics(analytics_filter)
        if self.native_percentiles:
            statement = select(*self._statistics_columns())
        else:
            statement = self._amounts_select()
        statement = statement.where(*[p.fragment for p in predicates])

        return self._compiled(
            statement, [p.parameter for p in predicates], QueryShape.SCALAR, predicates
        )

    def compile_grouped_aggregate(self, analytics_filter: AnalyticsFilter) -> CompiledQuery:
        expression = group_expression(analytics_filter.group_by)
        predicates = self.predicate_builder.build_analytics(analytics_filter)
        fragments = [p.fragment for p in predicates]

        if self.native_percentiles:
            key_column = expression.sql()
            statement = (
                select(key_column.label("group_key"), *self._statistics_columns())
                .where(*fragments)
                .group_by(key_column)
                .order_by(key_column)
            )
        else:
            statement = self._amounts_select().where(*fragments)

        return self._compiled(
            statement,
            [p.parameter for p in predicates],
            QueryShape.GROUPED,
            predicates,
            group_key=GroupKey(analytics_filter.group_by),
        )

    @staticmethod
    def _statistics_columns() -> List[ColumnElement]:
        amount = LedgerEntry.amount
        return [
            func.count().label("count"),
            func.coalesce(func.sum(amount), 0).label("total_sum"),
            func.coalesce(func.avg(amount), 0).label("avg"),
            func.coalesce(func.percentile_cont(MEDIAN).within_group(amount), 0).label("median"),
            func.coalesce(func.percentile_cont(P90).within_group(amount), 0).label("p90"),
        ]

    @staticmethod
    def _amounts_select() -> Select:
        return select(LedgerEntry.date, LedgerEntry.category, LedgerEntry.amount).order_by(
            LedgerEntry.amount.asc()
        )

    # ----- helpers -----

    @staticmethod
    def _filtered(statement: Select, predicates: List[Predicate]) -> Select:
        if predicates:
            statement = statement.where(*[p.fragment for p in predicates])
        return statement

    def _compiled(self, statement, parameters, shape, predicates, pagination=None, group_key=None) -> CompiledQuery:
        sql = self._compile_query_to_sql(statement)
        logger.debug("Compiled %s query: %s params=%r", shape.value, sql, parameters)
        return CompiledQuery(
            statement=statement,
            sql=sql,
            parameters=parameters,
            shape=shape,
            native=self.native_percentiles,
            pagination=pagination,
            group_key=group_key,
            predicates=predicates,
        )

    def _compile_query_to_sql(self, statement: Select) -> str:
        """Compile to SQL text with placeholders; parameter values stay bound."""
        return str(statement.compile(dialect=self.dialect))
