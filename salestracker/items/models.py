"""Database models for ledger entries."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Numeric, String

from salestracker.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class LedgerEntry(Base):
    """A single income or expense record. Timestamps are stored as naive UTC."""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String(16), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    description = Column(String(1000), nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<LedgerEntry {self.id} {self.type} {self.amount} {self.date}>"
