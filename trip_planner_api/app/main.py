"""
Main entrypoint for the Trip Planner API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes versioned routers.  The app
is instantiated at import time as ``app`` so it can be served with::

    uvicorn trip_planner_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.db import init_db
from .core.errors import AppError, app_error_handler
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    # NotFound, InvalidArgument, Conflict and calendar errors raised by
    # services become JSON error responses here.
    app.add_exception_handler(AppError, app_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first start and applies pending migrations.
        init_db()

    return app


app = create_app()
