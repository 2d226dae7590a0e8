"""API router for ledger analytics."""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query

from salestracker.analytics.schemas import AnalyticsResult
from salestracker.analytics.service import AnalyticsService
from salestracker.core.dependencies import CompilerDep, SessionDep, ValidatorDep
from salestracker.query.engine import AggregationEngine
from salestracker.query.schemas import RawAnalyticsFilter

router = APIRouter(
    prefix="/analytics",
    tags=["analytics"],
)


def get_analytics_service(session: SessionDep, validator: ValidatorDep, compiler: CompilerDep) -> AnalyticsService:
    """Get AnalyticsService instance."""
    return AnalyticsService(validator, AggregationEngine(session, compiler))


@router.get("", response_model=AnalyticsResult, response_model_exclude_none=True)
def get_analytics(
    date_from: Optional[dt.date] = Query(None, alias="from", description="Inclusive lower date bound (required)"),
    date_to: Optional[dt.date] = Query(None, alias="to", description="Inclusive upper date bound (required)"),
    group_by: Optional[str] = Query(None, description="day, week, month or category"),
    type: Optional[str] = Query(None, description="income or expense"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsResult:
    """Sum, average, median and 90th percentile of amounts in the date range."""
    return service.get_analytics(
        RawAnalyticsFilter(date_from=date_from, date_to=date_to, kind=type, group_by=group_by)
    )
