"""Service layer for ledger entries."""

import logging

from salestracker.core.base_service import BaseService
from salestracker.items.dao import LedgerEntryDAO
from salestracker.items.models import LedgerEntry
from salestracker.items.schemas import EntryBase, EntryCreate, EntryRead, EntryUpdate, ListingResponse
from salestracker.query.engine import ListingEngine
from salestracker.query.schemas import RawListingFilter
from salestracker.query.validation import LedgerValidator

logger = logging.getLogger(__name__)


class LedgerService(BaseService[LedgerEntry, EntryCreate, EntryUpdate, EntryRead]):
    """CRUD and filtered listing of ledger entries."""

    response_model = EntryRead

    def __init__(self, dao: LedgerEntryDAO, validator: LedgerValidator, listing_engine: ListingEngine):
        super().__init__(dao)
        self.validator = validator
        self.listing_engine = listing_engine

    def list_entries(self, raw_filter: RawListingFilter) -> ListingResponse:
        listing_filter = self.validator.validate_listing(raw_filter)
        entries, total_count = self.listing_engine.fetch(listing_filter)
        return ListingResponse(items=[self._to_response(e) for e in entries], total_count=total_count)

    # ===== BASE SERVICE HOOKS =====

    def _normalize_id(self, id) -> str:
        return self.validator.parse_identifier(id)

    def _validate_create(self, create_data: EntryCreate) -> None:
        self._validate_payload(create_data)

    def _validate_update(self, update_data: EntryUpdate) -> None:
        self._validate_payload(update_data)

    def _validate_payload(self, data: EntryBase) -> None:
        self.validator.validate_entry(
            kind=data.type,
            amount=data.amount,
            category=data.category,
            description=data.description,
            entry_date=data.date,
        )
