"""Response schemas for ledger analytics."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel

from salestracker.query.statistics import Summary


class StatisticsBase(BaseModel):
    total_sum: Decimal
    avg: Decimal
    count: int
    median: Decimal
    p90: Decimal

    @staticmethod
    def summary_fields(summary: Summary) -> dict:
        return {
            "total_sum": summary.total_sum,
            "avg": summary.avg,
            "count": summary.count,
            "median": summary.median,
            "p90": summary.p90,
        }


class GroupedAnalytics(StatisticsBase):
    """Statistics for one group key (a date string or a category)."""

    key: str

    @classmethod
    def from_summary(cls, key: str, summary: Summary) -> "GroupedAnalytics":
        return cls(key=key, **cls.summary_fields(summary))


class AnalyticsResult(StatisticsBase):
    """Statistics over the whole filtered set, plus per-group statistics when requested."""

    groups: Optional[List[GroupedAnalytics]] = None

    @classmethod
    def from_summary(cls, summary: Summary) -> "AnalyticsResult":
        return cls(**cls.summary_fields(summary))
