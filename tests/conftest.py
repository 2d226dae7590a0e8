"""
Test configuration and shared fixtures for the SalesTracker test suite.
Provides database setup, the API client and sample ledger entries.
"""

import os
import tempfile

# Point the application at a throwaway SQLite file before it is imported
_TEST_DIR = tempfile.mkdtemp(prefix="salestracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["RETRY_DELAY"] = "0"
os.environ["REQUEST_LOG_ENABLED"] = "true"

from datetime import date
from decimal import Decimal
from typing import List

import pytest
from fastapi.testclient import TestClient

from salestracker.app import create_app
from salestracker.core.database import Base, SessionLocal, engine, get_db, init_db
from salestracker.items.models import LedgerEntry


# ===== DATABASE SETUP =====

@pytest.fixture(scope="function")
def db_session():
    """Session on the test database; every table is emptied afterwards."""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create FastAPI test client with the session dependency overridden"""
    app = create_app()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ===== SAMPLE DATA FIXTURES =====

@pytest.fixture
def sample_entries(db_session) -> List[LedgerEntry]:
    """Five entries over January and February 2024, each on a distinct date."""
    entries = [
        LedgerEntry(type="income", amount=Decimal("100.00"), category="salary", description="January pay", date=date(2024, 1, 5)),
        LedgerEntry(type="expense", amount=Decimal("20.00"), category="food", description="groceries", date=date(2024, 1, 10)),
        LedgerEntry(type="expense", amount=Decimal("30.00"), category="food", description="", date=date(2024, 1, 20)),
        LedgerEntry(type="income", amount=Decimal("50.00"), category="bonus", description="", date=date(2024, 2, 3)),
        LedgerEntry(type="expense", amount=Decimal("40.00"), category="rent", description="February rent", date=date(2024, 2, 15)),
    ]
    db_session.add_all(entries)
    db_session.commit()
    for entry in entries:
        db_session.refresh(entry)
    return entries
