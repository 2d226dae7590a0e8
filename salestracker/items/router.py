"""API router for ledger entries."""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from salestracker.core.dependencies import CompilerDep, SessionDep, ValidatorDep
from salestracker.items.dao import LedgerEntryDAO
from salestracker.items.schemas import EntryCreate, EntryRead, EntryUpdate, ListingResponse
from salestracker.items.service import LedgerService
from salestracker.query.builder import MAX_OFFSET
from salestracker.query.engine import ListingEngine
from salestracker.query.schemas import RawListingFilter

router = APIRouter(
    prefix="/items",
    tags=["items"],
)


# ===== DEPENDENCY INJECTION =====


def get_ledger_service(session: SessionDep, validator: ValidatorDep, compiler: CompilerDep) -> LedgerService:
    """Get LedgerService instance."""
    return LedgerService(LedgerEntryDAO(session), validator, ListingEngine(session, compiler))


# ===== ENDPOINTS =====


@router.post("", response_model=EntryRead, status_code=status.HTTP_201_CREATED)
def create_entry(payload: EntryCreate, service: LedgerService = Depends(get_ledger_service)) -> EntryRead:
    return service.create(payload)


@router.get("", response_model=ListingResponse)
def list_entries(
    date_from: Optional[dt.date] = Query(None, alias="from", description="Inclusive lower date bound"),
    date_to: Optional[dt.date] = Query(None, alias="to", description="Inclusive upper date bound"),
    category: Optional[str] = Query(None),
    type: Optional[str] = Query(None, description="income or expense"),
    sort_by: Optional[str] = Query(None, description="date, amount, category or type"),
    order: Optional[str] = Query(None, description="asc or desc"),
    limit: Optional[int] = Query(None, description="Page size; out-of-range values use the default"),
    offset: Optional[int] = Query(None, le=MAX_OFFSET),
    service: LedgerService = Depends(get_ledger_service),
) -> ListingResponse:
    """List entries matching the filters, newest first unless sorted otherwise."""
    raw_filter = RawListingFilter(
        date_from=date_from,
        date_to=date_to,
        category=category,
        kind=type,
        sort_by=sort_by,
        order=order,
        limit=limit,
        offset=offset,
    )
    return service.list_entries(raw_filter)


@router.get("/{entry_id}", response_model=EntryRead)
def get_entry(entry_id: str, service: LedgerService = Depends(get_ledger_service)) -> EntryRead:
    return service.get_by_id(entry_id)


@router.put("/{entry_id}", response_model=EntryRead)
def replace_entry(
    entry_id: str, payload: EntryUpdate, service: LedgerService = Depends(get_ledger_service)
) -> EntryRead:
    return service.update(entry_id, payload)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: str, service: LedgerService = Depends(get_ledger_service)) -> Response:
    service.delete(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
