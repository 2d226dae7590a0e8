"""Pydantic schemas for the ledger entry API."""

import datetime as dt
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class EntryBase(BaseModel):
    """Fields shared by create and replace payloads.

    ``type`` stays a plain string here so an unknown kind is reported by the
    ledger validator rather than as a request decoding error.
    """

    type: str
    amount: Decimal
    category: str
    description: str = ""
    date: dt.date

    model_config = ConfigDict(extra="forbid")


class EntryCreate(EntryBase):
    """Schema for creating a ledger entry."""
    pass


class EntryUpdate(EntryBase):
    """Schema for replacing a ledger entry. All fields are rewritten."""
    pass


class EntryRead(BaseModel):
    id: str
    type: str
    amount: Decimal
    category: str
    description: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: dt.datetime) -> str:
        # Stored as naive UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return value.isoformat()


class ListingResponse(BaseModel):
    """One page of entries plus the total number of matches."""

    items: List[EntryRead] = Field(default_factory=list)
    total_count: int = 0
