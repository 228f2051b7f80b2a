"""Project registry: register, list, rename and remove project directories."""

import logging
from pathlib import Path
from typing import List

from ..database import Database
from ..exceptions import ValidationError
from ..models.project import DEFAULT_ICON, DEFAULT_ICON_COLOR
from ..repositories.project_repository import ProjectRepository
from ..schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse

DEFAULT_PROJECT_NAME = "Unnamed Project"

logger = logging.getLogger(__name__)


class ProjectService:
    """CRUD over registered projects.

    Each public method is one store operation: it holds the database lock for
    its whole duration and returns detached Pydantic models.
    """

    def __init__(self, database: Database):
        self.database = database

    def add_project(self, data: ProjectCreate) -> ProjectResponse:
        """Register a directory. The path must exist and be a directory."""
        path = Path(data.path).expanduser()
        if not path.exists():
            raise ValidationError(f"Path does not exist: {data.path}", field="path")
        if not path.is_dir():
            raise ValidationError(f"Path is not a directory: {data.path}", field="path")

        path = path.absolute()
        name = data.name or path.name or DEFAULT_PROJECT_NAME

        with self.database.session() as db:
            project = ProjectRepository(db).create(
                name=name,
                path=str(path),
                icon=data.icon or DEFAULT_ICON,
                icon_color=data.icon_color or DEFAULT_ICON_COLOR,
            )
            result = ProjectResponse.model_validate(project)

        logger.info(f"Registered project {result.id}: {result.path}", extra={"project_id": result.id})
        return result

    def list_projects(self) -> List[ProjectResponse]:
        with self.database.session() as db:
            return [ProjectResponse.model_validate(p) for p in ProjectRepository(db).get_all()]

    def get_project(self, project_id: int) -> ProjectResponse:
        with self.database.session() as db:
            return ProjectResponse.model_validate(ProjectRepository(db).get_by_id(project_id))

    def update_project(self, project_id: int, data: ProjectUpdate) -> ProjectResponse:
        # Lookup and update share one locked session, so a concurrent delete
        # cannot slip in between them.
        with self.database.session() as db:
            project = ProjectRepository(db).update(project_id, data)
            result = ProjectResponse.model_validate(project)

        logger.info(f"Updated project {project_id}", extra={"project_id": project_id})
        return result

    def delete_project(self, project_id: int) -> None:
        with self.database.session() as db:
            ProjectRepository(db).delete(project_id)
        logger.info(f"Deleted project {project_id}", extra={"project_id": project_id})
