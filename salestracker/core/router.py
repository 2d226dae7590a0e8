# salestracker/core/router.py
"""
Module for registering routes in the FastAPI application.
"""

from fastapi import FastAPI

from salestracker.items.router import router as items_router
from salestracker.analytics.router import router as analytics_router
from salestracker.export.router import router as export_router
from salestracker.logging.router import router as log_router


def register_routes(app: FastAPI) -> None:
    """
    Registers all the routes for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance.
    """
    app.include_router(items_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")
    app.include_router(export_router, prefix="/api")
    app.include_router(log_router, prefix="/api")
