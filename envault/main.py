"""Main FastAPI application.

Run locally with::

    uvicorn envault.main:app --port 7410
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import projects_router, env_files_router, scan_router
from .core.config import settings
from .core.logging_config import setup_logging
from .database import Database, get_database, initialize
from .exceptions import EnvaultException, StoreInitializationError
from .middleware.exception_handler import (
    envault_exception_handler,
    request_validation_exception_handler,
)
from .middleware.request_context import RequestContextMiddleware
from .services import ProjectService

# Setup logging first
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the local database on startup; a failure here is fatal."""
    try:
        database = initialize()
    except StoreInitializationError as e:
        logger.critical(
            "Cannot initialize the Envault database.\n"
            f"  {e.message}\n"
            "  Check that the data directory exists and is writable, "
            "or set ENVAULT_DATA_DIR."
        )
        raise SystemExit(1) from e

    app.state.database = database
    logger.info(
        "Envault API started | db=%s | cors=%s",
        database.db_path,
        ",".join(settings.get_cors_origins()),
    )

    yield  # App runs here

    database.close()


# Create FastAPI app
app = FastAPI(
    title="Envault API",
    description=(
        "Local API for managing project environment files. Register project "
        "directories, list their `.env*` files and switch which one is copied "
        "onto `.env`. Errors are returned as `{\"error\": \"message\"}`."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Middleware stack (outermost first, CORS wraps request context).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)
app.add_middleware(RequestContextMiddleware)

# Register exception handlers
app.add_exception_handler(EnvaultException, envault_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# Include routers
app.include_router(projects_router)
app.include_router(env_files_router)
app.include_router(scan_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "Envault API",
        "version": __version__,
        "status": "running"
    }


_startup_time = time.monotonic()


@app.get("/health")
def health_check(database: Database = Depends(get_database)):
    """Health check returning database status, uptime, and project count.

    Never raises; reports degraded status when the database is unusable.
    """
    db_status = "ok"
    project_count = 0
    try:
        project_count = len(ProjectService(database).list_projects())
    except EnvaultException:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": __version__,
        "project_count": project_count,
    }
