"""CSV export of ledger entries."""

import io
import logging
from typing import List

import pandas as pd

from salestracker.items.models import LedgerEntry
from salestracker.query.engine import ListingEngine
from salestracker.query.schemas import RawListingFilter, SortKey, SortOrder
from salestracker.query.validation import LedgerValidator

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "id",
    "type",
    "amount",
    "category",
    "description",
    "date",
    "created_at",
    "updated_at",
]

RFC3339 = "%Y-%m-%dT%H:%M:%SZ"


def _entry_to_row(entry: LedgerEntry) -> List[str]:
    return [
        entry.id,
        entry.type,
        f"{entry.amount:.2f}",
        entry.category,
        entry.description or "",
        entry.date.isoformat(),
        entry.created_at.strftime(RFC3339),
        entry.updated_at.strftime(RFC3339),
    ]


class ExportService:
    """Renders every entry matching a filter as CSV, newest first, without pagination."""

    def __init__(self, validator: LedgerValidator, listing_engine: ListingEngine):
        self.validator = validator
        self.listing_engine = listing_engine

    def export_csv(self, raw_filter: RawListingFilter) -> str:
        export_filter = RawListingFilter(
            date_from=raw_filter.date_from,
            date_to=raw_filter.date_to,
            category=raw_filter.category,
            kind=raw_filter.kind,
            sort_by=SortKey.DATE.value,
            order=SortOrder.DESC.value,
            no_limit=True,
        )
        listing_filter = self.validator.validate_listing(export_filter)
        entries, total_count = self.listing_engine.fetch(listing_filter)

        df = pd.DataFrame([_entry_to_row(e) for e in entries], columns=EXPORT_COLUMNS)
        output = io.StringIO()
        df.to_csv(output, index=False)

        logger.info("Exported %d entries to CSV", total_count)
        return output.getvalue()
