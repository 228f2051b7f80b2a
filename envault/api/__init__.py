"""API routes."""

from .projects import router as projects_router
from .env_files import router as env_files_router, scan_router

__all__ = [
    "projects_router",
    "env_files_router",
    "scan_router",
]
