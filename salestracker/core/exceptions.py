# salestracker/core/exceptions.py
"""Error kinds raised by the ledger services.

Validation errors map to HTTP 400, ``EntryNotFound`` to 404 and everything
else to 500 (see ``salestracker.logging.exception_handlers``).
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    message = "ledger error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


# ===== VALIDATION ERRORS =====


class LedgerValidationError(LedgerError):
    """Caller supplied an invalid value. Never retried."""

    message = "invalid request"


class InvalidKind(LedgerValidationError):
    message = "type must be 'income' or 'expense'"


class InvalidAmount(LedgerValidationError):
    message = "amount must be greater than zero"


class InvalidCategory(LedgerValidationError):
    message = "category must not be empty"


class InvalidDescription(LedgerValidationError):
    message = "description must be at most 1000 characters"


class InvalidDate(LedgerValidationError):
    message = "date must not be zero"


class InvalidIdentifier(LedgerValidationError):
    message = "id must be a valid UUID"


class InvalidSortKey(LedgerValidationError):
    message = "sort_by must be one of: date, amount, category, type"


class InvalidOrder(LedgerValidationError):
    message = "order must be 'asc' or 'desc'"


class InvalidGroupKey(LedgerValidationError):
    message = "group_by must be one of: day, week, month, category"


class InvalidDateRange(LedgerValidationError):
    message = "'from' date must not be after 'to' date"


# ===== LOOKUP / STORE ERRORS =====


class EntryNotFound(LedgerError):
    message = "item not found"


class StoreFailure(LedgerError):
    """The backing store rejected or could not run a statement."""

    message = "store operation failed"


class QueryCompilationError(LedgerError):
    """A query was requested with a dimension outside the allow-lists."""

    message = "query compilation failed"
