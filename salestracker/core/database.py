# salestracker/core/database.py
"""Database engine, session factory and store retry policy."""

import logging
import time
from typing import Callable, Optional, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from salestracker.core.config import settings
from salestracker.core.exceptions import StoreFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATABASE_URL = settings.database_url

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# ===== SESSION GENERATORS =====


def get_db():
    """Get a database session for the duration of a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables registered on ``Base``."""
    # Import models so they are registered with Base
    from salestracker.items.models import LedgerEntry  # noqa: F401
    from salestracker.logging.models import Log  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized at %s", engine.url.render_as_string(hide_password=True))


# ===== RETRY POLICY =====


def run_with_retry(
    db: Session,
    operation: Callable[[], T],
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
) -> T:
    """Run ``operation`` against the store, retrying transient failures.

    Only ``OperationalError`` (dropped connections, locked databases) is
    retried; the session is rolled back before each new attempt. Any other
    SQLAlchemy error, or exhausting the attempts, raises ``StoreFailure``.
    """
    attempts = settings.retry_attempts if attempts is None else attempts
    delay = settings.retry_delay if delay is None else delay
    backoff = settings.retry_backoff if backoff is None else backoff

    attempt = 1
    while True:
        try:
            return operation()
        except OperationalError as e:
            db.rollback()
            if attempt >= attempts:
                logger.error("Store operation failed after %d attempts: %s", attempt, e)
                raise StoreFailure() from e
            logger.warning(
                "Transient store error (attempt %d/%d), retrying in %.3fs: %s",
                attempt,
                attempts,
                delay,
                e,
            )
            time.sleep(delay)
            delay *= backoff
            attempt += 1
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Store operation failed: %s", e)
            raise StoreFailure() from e
