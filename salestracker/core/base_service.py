# salestracker/core/base_service.py
"""Generic base service for business logic orchestration."""

from abc import ABC
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from salestracker.core.base_dao import BaseDAO
from salestracker.core.exceptions import EntryNotFound

ModelType = TypeVar("ModelType")
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class BaseService(Generic[ModelType, CreateSchemaType, UpdateSchemaType, ResponseSchemaType], ABC):
    """Generic service for business logic orchestration.

    Lookups by identifier run ``_normalize_id`` first, so a malformed id is
    rejected before the store is touched, and raise ``EntryNotFound`` when
    no record matches.
    """

    def __init__(self, dao: BaseDAO[ModelType]):
        self.dao = dao

    def get_by_id(self, id: Any) -> ResponseSchemaType:
        """Get record by ID with business logic applied."""
        return self._to_response(self._get_record(id))

    def create(self, create_data: CreateSchemaType, **extra_data) -> ResponseSchemaType:
        """Create new record with validation and business logic."""
        self._validate_create(create_data)

        data = create_data.model_dump()
        data.update(extra_data)

        record = self.dao.create(**data)
        return self._to_response(record)

    def update(self, id: Any, update_data: UpdateSchemaType, **extra_data) -> ResponseSchemaType:
        """Replace an existing record.

        Order: identifier, then payload, then lookup (``EntryNotFound``).
        """
        key = self._normalize_id(id)
        self._validate_update(update_data)

        record = self._load(key)

        data = update_data.model_dump()
        data.update(extra_data)

        updated_record = self.dao.update(record, **data)
        return self._to_response(updated_record)

    def delete(self, id: Any) -> None:
        """Delete record with business logic."""
        record = self._get_record(id)
        self._validate_delete(record)
        self.dao.delete(record)

    def _get_record(self, id: Any) -> ModelType:
        return self._load(self._normalize_id(id))

    def _load(self, key: Any) -> ModelType:
        record = self.dao.get_by_id(key)
        if record is None:
            raise EntryNotFound()
        return record

    # ===== OVERRIDE IN SUBCLASSES =====

    def _normalize_id(self, id: Any) -> Any:
        """Check and canonicalize an identifier. Override for custom key types."""
        return id

    def _to_response(self, record: ModelType) -> ResponseSchemaType:
        """Convert database model to response schema."""
        if hasattr(self, "response_model"):
            return self.response_model.model_validate(record)
        raise NotImplementedError("Must implement _to_response or set response_model")

    def _validate_create(self, create_data: CreateSchemaType) -> None:
        """Validate data before creation. Override for custom validation."""
        pass

    def _validate_update(self, update_data: UpdateSchemaType) -> None:
        """Validate data before update. Override for custom validation."""
        pass

    def _validate_delete(self, record: ModelType) -> None:
        """Validate before deletion. Override for custom validation."""
        pass
