"""Middleware that records every handled request in the ``log`` table."""

import getpass
import logging
import os
import platform
import socket
import time
from datetime import datetime
from typing import Callable

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.background import BackgroundTask, BackgroundTasks
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from salestracker.core.config import settings
from salestracker.core.database import SessionLocal
from salestracker.logging.models import Log

logger = logging.getLogger(__name__)

EXCLUDED_PATHS = ("/api/logs", "/health")


def current_username() -> str:
    try:
        return os.environ.get("USER") or os.environ.get("USERNAME") or getpass.getuser() or "unknown_user"
    except (KeyError, OSError):
        return "unknown_user"


def current_hostname() -> str:
    return socket.gethostname() or platform.node() or "unknown_host"


def write_log(**fields) -> None:
    """Persist one log row; failures are reported but never reach the client."""
    try:
        with SessionLocal() as session:
            session.add(Log(timestamp=datetime.now(), **fields))
            session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to write request log for %s %s", fields.get("method"), fields.get("path"))


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, application_id: str = None):
        super().__init__(app)
        self.username = current_username()
        self.hostname = current_hostname()
        self.application_id = application_id or settings.application_id

        logger.info(
            "Request logging enabled for %s on %s (app id %s)",
            self.username,
            self.hostname,
            self.application_id,
        )

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path.startswith(EXCLUDED_PATHS):
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        task = BackgroundTask(
            write_log,
            method=request.method,
            path=request.url.path,
            query_string=request.url.query or None,
            status_code=response.status_code,
            client_ip=request.client.host if request.client else None,
            processing_time=duration_ms,
            user_agent=request.headers.get("user-agent"),
            username=self.username,
            hostname=self.hostname,
            application_id=self.application_id,
        )

        # Keep any background work the endpoint already scheduled
        if response.background is None:
            response.background = task
        else:
            response.background = BackgroundTasks(tasks=[response.background, task])

        return response
