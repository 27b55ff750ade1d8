"""
Venue Map FastAPI Application

Main entry point for the Venue Map application, serving the marker layout
API for the event-discovery map.

Author: Venue Map team
Date: 2026-10-17
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from database import init_db
from logic.config import get_settings
from logic.logging_config import setup_logging
from server.admin import router as admin_router
from server.markers import router as markers_router

settings = get_settings()
setup_logging(settings["log_level"], settings["log_file"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the venue tables if they do not exist yet."""
    init_db()
    yield


app = FastAPI(title="Venue Map", lifespan=lifespan)

# Include all routers
app.include_router(markers_router)
app.include_router(admin_router)
