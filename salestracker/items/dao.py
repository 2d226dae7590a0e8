"""Data access for ledger entries."""

from sqlalchemy.orm import Session

from salestracker.core.base_dao import BaseDAO
from salestracker.items.models import LedgerEntry


class LedgerEntryDAO(BaseDAO[LedgerEntry]):
    """CRUD for ledger entries. Filtered listings go through ``ListingEngine``."""

    def __init__(self, db_session: Session):
        super().__init__(LedgerEntry, db_session)
