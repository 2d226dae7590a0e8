"""Service layer for ledger analytics."""

import logging

from salestracker.analytics.schemas import AnalyticsResult, GroupedAnalytics
from salestracker.query.engine import AggregationEngine
from salestracker.query.schemas import RawAnalyticsFilter
from salestracker.query.validation import LedgerValidator

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Validates analytics requests and orchestrates scalar and grouped aggregation."""

    def __init__(self, validator: LedgerValidator, engine: AggregationEngine):
        self.validator = validator
        self.engine = engine

    def get_analytics(self, raw_filter: RawAnalyticsFilter) -> AnalyticsResult:
        """Scalar statistics for the range; per-group statistics only when ``group_by`` is set.

        A requested grouping is always present in the result, as an empty
        list when nothing matches.

        Validation failures are raised before any query runs. Store failures
        propagate unchanged.
        """
        analytics_filter = self.validator.validate_analytics(raw_filter)

        result = AnalyticsResult.from_summary(self.engine.aggregate(analytics_filter))

        if analytics_filter.group_by is not None:
            groups = self.engine.aggregate_grouped(analytics_filter)
            result.groups = [GroupedAnalytics.from_summary(key, summary) for key, summary in groups]

        logger.debug(
            "Analytics %s..%s type=%s group_by=%s count=%d",
            analytics_filter.date_from,
            analytics_filter.date_to,
            analytics_filter.kind,
            analytics_filter.group_by,
            result.count,
        )
        return result
