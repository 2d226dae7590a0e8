# salestracker/core/dependencies.py
"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from salestracker.core.config import settings
from salestracker.core.database import get_db
from salestracker.query.builder import QueryCompiler
from salestracker.query.validation import LedgerValidator

SessionDep = Annotated[Session, Depends(get_db)]


def get_validator() -> LedgerValidator:
    """Validators are stateless; each request gets its own."""
    return LedgerValidator()


ValidatorDep = Annotated[LedgerValidator, Depends(get_validator)]


def get_query_compiler(session: SessionDep) -> QueryCompiler:
    """Compiler bound to the dialect of the session's engine."""
    return QueryCompiler(
        session.get_bind().dialect,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


CompilerDep = Annotated[QueryCompiler, Depends(get_query_compiler)]
