"""FastAPI application factory for SalesTracker."""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from salestracker.core.config import settings
from salestracker.core.database import init_db
from salestracker.core.exceptions import EntryNotFound, LedgerError, LedgerValidationError, StoreFailure
from salestracker.core.router import register_routes
from salestracker.logging.exception_handlers import (
    entry_not_found_exception_handler,
    general_exception_handler,
    http_exception_handler,
    ledger_exception_handler,
    ledger_validation_exception_handler,
    request_validation_exception_handler,
    store_failure_exception_handler,
)
from salestracker.logging.middleware import LoggingMiddleware

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    logging.basicConfig(level=level or settings.log_level, format=LOG_FORMAT)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="SalesTracker",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    init_db()

    if settings.request_log_enabled:
        app.add_middleware(LoggingMiddleware)

    # Starlette picks the handler for the closest class in the exception MRO
    app.add_exception_handler(LedgerValidationError, ledger_validation_exception_handler)
    app.add_exception_handler(EntryNotFound, entry_not_found_exception_handler)
    app.add_exception_handler(StoreFailure, store_failure_exception_handler)
    app.add_exception_handler(LedgerError, ledger_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    return app
