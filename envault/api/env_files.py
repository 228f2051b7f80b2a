"""Env file API: scan a directory, activate, read files and history."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..database import Database, get_database
from ..schemas.env_file import (
    ActivateRequest,
    EnvFile,
    EnvFileContent,
    EnvHistoryResponse,
)
from ..schemas.project import ActiveEnvironmentResponse
from ..services import EnvironmentService, scan_env_files

router = APIRouter(prefix="/api/projects/{project_id}", tags=["environments"])

# Scanning works on a bare path, not a registered project id.
scan_router = APIRouter(tags=["environments"])


# -- Scan -----------------------------------------------------------------

@scan_router.get("/api/env-files", response_model=List[EnvFile])
def scan(
    project_path: str = Query(..., min_length=1),
    active_env: Optional[str] = Query(None),
):
    """List the ``.env*`` files in a directory; ``.env`` first."""
    return scan_env_files(project_path, active_env)


# -- Activation -------------------------------------------------------------

@router.post("/activate", status_code=204)
def activate_env(
    project_id: int,
    request: ActivateRequest,
    database: Database = Depends(get_database),
):
    """Copy the chosen env file over ``.env`` (backing up the old one)."""
    EnvironmentService(database).activate(project_id, request.env_name)
    return Response(status_code=204)


@router.get("/active-env", response_model=ActiveEnvironmentResponse)
def get_active_env(project_id: int, database: Database = Depends(get_database)):
    active = EnvironmentService(database).get_active_environment(project_id)
    return ActiveEnvironmentResponse(active_environment=active)


# -- Reading ----------------------------------------------------------------

@router.get("/env-files/{env_name}", response_model=EnvFileContent)
def read_env_file(
    project_id: int,
    env_name: str,
    database: Database = Depends(get_database),
):
    return EnvironmentService(database).read_env_file(project_id, env_name)


@router.get("/history", response_model=List[EnvHistoryResponse])
def list_history(project_id: int, database: Database = Depends(get_database)):
    """Activation history, newest first."""
    return EnvironmentService(database).get_history(project_id)
