"""Repository for project database operations."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import func

from ..models import Project
from ..models.project import DEFAULT_ICON, DEFAULT_ICON_COLOR
from ..schemas.project import ProjectUpdate
from ..exceptions import ProjectNotFoundError, ProjectAlreadyExistsError, DatabaseError
from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Data access layer for registered projects."""

    model_class = Project
    not_found_error = ProjectNotFoundError

    def create(
        self,
        name: str,
        path: str,
        icon: str = DEFAULT_ICON,
        icon_color: str = DEFAULT_ICON_COLOR,
    ) -> Project:
        """Insert a project and reload it with its server-assigned timestamps."""
        if self.get_by_path(path) is not None:
            raise ProjectAlreadyExistsError(path)

        project = Project(name=name, path=path, icon=icon, icon_color=icon_color)
        self.db.add(project)
        try:
            self.db.flush()
        except IntegrityError as e:
            if "UNIQUE" in str(e.orig):
                raise ProjectAlreadyExistsError(path) from e
            raise DatabaseError("Failed to insert project", e) from e
        self.db.refresh(project)
        return project

    def get_by_path(self, path: str) -> Optional[Project]:
        return self.db.query(Project).filter(Project.path == path).first()

    def get_all(self) -> List[Project]:
        """All projects, most recently touched first."""
        return self.db.query(Project).order_by(
            Project.updated_at.desc(),
            Project.id.desc()
        ).all()

    def update(self, project_id: int, data: ProjectUpdate) -> Project:
        """Apply a partial update. Fields left as None keep their stored value."""
        project = self.get_by_id(project_id)

        if data.name is not None:
            project.name = data.name
        if data.icon is not None:
            project.icon = data.icon
        if data.icon_color is not None:
            project.icon_color = data.icon_color
        project.updated_at = func.now()

        self.db.flush()
        self.db.refresh(project)
        return project

    def delete(self, project_id: int) -> None:
        """Delete a project. Environments and history go with it (ON DELETE CASCADE)."""
        affected = (
            self.db.query(Project)
            .filter(Project.id == project_id)
            .delete(synchronize_session=False)
        )
        if affected == 0:
            raise ProjectNotFoundError(project_id)

    def set_active_environment(self, project_id: int, env_name: str) -> None:
        affected = (
            self.db.query(Project)
            .filter(Project.id == project_id)
            .update(
                {Project.active_environment: env_name, Project.updated_at: func.now()},
                synchronize_session=False,
            )
        )
        if affected == 0:
            raise ProjectNotFoundError(project_id)

    def get_active_environment(self, project_id: int) -> Optional[str]:
        row = (
            self.db.query(Project.active_environment)
            .filter(Project.id == project_id)
            .first()
        )
        if row is None:
            raise ProjectNotFoundError(project_id)
        return row[0]
