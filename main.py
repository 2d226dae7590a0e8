#!/usr/bin/env python3
import uvicorn

from salestracker.app import create_app
from salestracker.core.config import settings

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    print(f"Starting SalesTracker on {settings.host}:{settings.port}")
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=False)
