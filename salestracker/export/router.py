"""API router for ledger exports."""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from salestracker.core.dependencies import CompilerDep, SessionDep, ValidatorDep
from salestracker.export.service import ExportService
from salestracker.query.engine import ListingEngine
from salestracker.query.schemas import RawListingFilter

router = APIRouter(
    prefix="/export",
    tags=["export"],
)


def get_export_service(session: SessionDep, validator: ValidatorDep, compiler: CompilerDep) -> ExportService:
    """Get ExportService instance."""
    return ExportService(validator, ListingEngine(session, compiler))


@router.get("/csv")
def export_csv(
    date_from: Optional[dt.date] = Query(None, alias="from"),
    date_to: Optional[dt.date] = Query(None, alias="to"),
    category: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    service: ExportService = Depends(get_export_service),
) -> StreamingResponse:
    """Download all matching entries as ``items.csv``."""
    content = service.export_csv(
        RawListingFilter(date_from=date_from, date_to=date_to, category=category, kind=type)
    )
    headers = {"Content-Disposition": 'attachment; filename="items.csv"'}
    return StreamingResponse(iter([content]), media_type="text/csv", headers=headers)
