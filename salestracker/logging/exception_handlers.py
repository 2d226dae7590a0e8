"""Exception handlers mapping ledger errors to HTTP responses."""

import logging
import traceback

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from salestracker.core.config import settings
from salestracker.core.exceptions import EntryNotFound, LedgerError, LedgerValidationError, StoreFailure
from salestracker.logging.middleware import current_hostname, current_username, write_log

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal Server Error"


async def ledger_validation_exception_handler(request: Request, exc: LedgerValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.detail})


async def entry_not_found_exception_handler(request: Request, exc: EntryNotFound):
    return JSONResponse(status_code=404, content={"detail": exc.detail})


async def store_failure_exception_handler(request: Request, exc: StoreFailure):
    # Backend details stay in the server log
    logger.error("Store failure on %s %s: %r", request.method, request.url.path, exc.__cause__ or exc)
    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR})


async def ledger_exception_handler(request: Request, exc: LedgerError):
    logger.error("Unhandled ledger error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR})


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request primitives (bad dates, missing fields)."""

    def convert_error(error):
        if isinstance(error, dict):
            return {k: convert_error(v) for k, v in error.items()}
        elif isinstance(error, (list, tuple)):
            return [convert_error(item) for item in error]
        elif isinstance(error, (str, int, float, bool)) or error is None:
            return error
        return str(error)

    return JSONResponse(status_code=422, content={"detail": convert_error(exc.errors())})


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions and record them with their traceback."""
    error_traceback = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("Unhandled exception on %s %s\n%s", request.method, request.url.path, error_traceback)

    write_log(
        method=request.method,
        path=request.url.path,
        query_string=request.url.query or None,
        status_code=500,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        username=current_username(),
        hostname=current_hostname(),
        application_id=settings.application_id,
        error_detail=error_traceback,
    )

    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR})
