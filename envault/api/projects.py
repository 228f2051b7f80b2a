"""Project API: register, list, rename/re-icon and remove projects."""

from typing import List

from fastapi import APIRouter, Depends, Response

from ..database import Database, get_database
from ..schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from ..services import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=201)
def add_project(data: ProjectCreate, database: Database = Depends(get_database)):
    """Register a local directory as a project."""
    return ProjectService(database).add_project(data)


@router.get("", response_model=List[ProjectResponse])
def list_projects(database: Database = Depends(get_database)):
    """All projects, most recently updated first."""
    return ProjectService(database).list_projects()


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, database: Database = Depends(get_database)):
    return ProjectService(database).get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    database: Database = Depends(get_database),
):
    """Update name, icon or icon colour. Omitted fields are left unchanged."""
    return ProjectService(database).update_project(project_id, data)


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: int, database: Database = Depends(get_database)):
    """Remove a project and its activation history. Files on disk are untouched."""
    ProjectService(database).delete_project(project_id)
    return Response(status_code=204)
