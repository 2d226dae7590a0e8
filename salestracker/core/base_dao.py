# salestracker/core/base_dao.py
"""Generic base DAO for common database operations."""

from abc import ABC
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from salestracker.core.database import Base, run_with_retry

ModelType = TypeVar("ModelType", bound=Base)


class BaseDAO(Generic[ModelType], ABC):
    """Generic DAO for common database operations.

    Every statement goes through ``run_with_retry`` so transient store
    errors are retried and the rest surface as ``StoreFailure``.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def _run(self, operation):
        return run_with_retry(self.db, operation)

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get record by primary key."""
        return self._run(lambda: self.db.get(self.model, id))

    def create(self, **data) -> ModelType:
        """Create new record."""

        def _create():
            db_obj = self.model(**data)
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj

        return self._run(_create)

    def update(self, db_obj: ModelType, **data) -> ModelType:
        """Update existing record."""

        def _update():
            for field, value in data.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj

        return self._run(_update)

    def delete(self, db_obj: ModelType) -> None:
        """Delete a loaded record."""

        def _delete():
            self.db.delete(db_obj)
            self.db.commit()

        self._run(_delete)
