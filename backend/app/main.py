"""FastAPI application factory."""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.health import get_health
from backend.app.api.trips import router as trips_router
from backend.app.config import get_settings
from backend.app.db.base import create_tables
from backend.app.db.session import get_engine
from backend.app.log_config import configure_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Itinerary Planner API",
        description="Trip collection persistence for the itinerary planner",
        version="0.1.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ui_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/healthz")
    async def healthz() -> dict[str, Any]:
        """Health check endpoint."""
        result = await get_health()
        return result.model_dump()

    app.include_router(trips_router)

    @app.on_event("startup")
    async def startup_event():
        """Run startup tasks."""
        logger.info("Application starting up...")
        create_tables(get_engine())

    return app


# Create app instance for uvicorn
app = create_app()
