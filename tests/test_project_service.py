"""Unit tests for ProjectService and the project store operations.

Runs against a real SQLite file per test, bypassing the HTTP stack.
"""

from datetime import datetime

import pytest

from envault.exceptions import (
    DatabaseError,
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
    ValidationError,
)
from envault.models import Project
from envault.repositories import HistoryRepository, ProjectRepository
from envault.schemas.project import ProjectCreate, ProjectUpdate
from envault.services import ProjectService


class TestAddProject:

    def test_registers_directory_with_defaults(self, database, project_dir):
        project = ProjectService(database).add_project(ProjectCreate(path=str(project_dir)))

        assert project.id > 0
        assert project.name == "my-app"
        assert project.path == str(project_dir.absolute())
        assert project.icon == "folder"
        assert project.icon_color == "#737373"
        assert project.active_environment is None
        assert project.created_at is not None
        assert project.updated_at is not None

    def test_explicit_name_and_icon(self, database, project_dir):
        project = ProjectService(database).add_project(
            ProjectCreate(path=str(project_dir), name="API", icon="server", icon_color="#ff0000")
        )
        assert project.name == "API"
        assert project.icon == "server"
        assert project.icon_color == "#ff0000"

    def test_missing_path_rejected(self, database, tmp_path):
        with pytest.raises(ValidationError, match="does not exist"):
            ProjectService(database).add_project(ProjectCreate(path=str(tmp_path / "nope")))

    def test_file_path_rejected(self, database, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")
        with pytest.raises(ValidationError, match="not a directory"):
            ProjectService(database).add_project(ProjectCreate(path=str(file_path)))

    def test_duplicate_path_rejected_first_survives(self, database, project_dir):
        svc = ProjectService(database)
        first = svc.add_project(ProjectCreate(path=str(project_dir)))

        with pytest.raises(ProjectAlreadyExistsError):
            svc.add_project(ProjectCreate(path=str(project_dir)))

        assert svc.get_project(first.id) == first
        assert len(svc.list_projects()) == 1

    def test_insert_then_get_is_identical(self, database, project_dir):
        svc = ProjectService(database)
        created = svc.add_project(ProjectCreate(path=str(project_dir)))
        assert svc.get_project(created.id) == created


class TestListProjects:

    def test_empty(self, database):
        assert ProjectService(database).list_projects() == []

    def test_most_recently_updated_first(self, database, make_project):
        first = make_project("one")
        second = make_project("two")
        third = make_project("three")

        ids = [p.id for p in ProjectService(database).list_projects()]
        # Same-second timestamps fall back to newest id first
        assert ids == [third.id, second.id, first.id]

    def test_updated_project_moves_to_front(self, database, make_project):
        first = make_project("one")
        make_project("two")

        with database.session() as db:
            db.query(Project).filter(Project.id == first.id).update(
                {Project.updated_at: datetime(2999, 1, 1)}, synchronize_session=False
            )

        assert ProjectService(database).list_projects()[0].id == first.id


class TestUpdateProject:

    def test_partial_update(self, database, make_project):
        project = make_project("svc", icon="box")
        updated = ProjectService(database).update_project(project.id, ProjectUpdate(name="Service"))

        assert updated.name == "Service"
        assert updated.icon == "box"
        assert updated.icon_color == project.icon_color
        assert updated.path == project.path

    def test_empty_update_changes_only_updated_at(self, database, make_project):
        project = make_project("svc")
        updated = ProjectService(database).update_project(project.id, ProjectUpdate())

        assert updated.model_dump(exclude={"updated_at"}) == project.model_dump(exclude={"updated_at"})
        assert updated.updated_at >= project.updated_at

    def test_unknown_id(self, database):
        with pytest.raises(ProjectNotFoundError):
            ProjectService(database).update_project(999, ProjectUpdate(name="x"))

    def test_blank_name_rejected_by_schema(self):
        with pytest.raises(ValueError):
            ProjectUpdate(name="   ")


class TestDeleteProject:

    def test_unknown_id(self, database):
        with pytest.raises(ProjectNotFoundError):
            ProjectService(database).delete_project(42)

    def test_delete_then_get_fails(self, database, make_project):
        svc = ProjectService(database)
        project = make_project("gone")
        svc.delete_project(project.id)

        with pytest.raises(ProjectNotFoundError):
            svc.get_project(project.id)

    def test_delete_cascades_history(self, database, make_project):
        project = make_project("gone")
        with database.session() as db:
            HistoryRepository(db).create(project.id, ".env")
            HistoryRepository(db).create(project.id, ".env.local")

        ProjectService(database).delete_project(project.id)

        with database.session() as db:
            assert HistoryRepository(db).get_by_project(project.id) == []


class TestStoreOperations:

    def test_active_environment_round_trip(self, database, make_project):
        project = make_project("app")
        with database.session() as db:
            ProjectRepository(db).set_active_environment(project.id, ".env.staging")
        with database.session() as db:
            assert ProjectRepository(db).get_active_environment(project.id) == ".env.staging"

    def test_set_active_environment_unknown_id(self, database):
        with pytest.raises(ProjectNotFoundError):
            with database.session() as db:
                ProjectRepository(db).set_active_environment(7, ".env")

    def test_get_active_environment_unknown_id(self, database):
        with pytest.raises(ProjectNotFoundError):
            with database.session() as db:
                ProjectRepository(db).get_active_environment(7)

    def test_history_for_unknown_project_is_storage_error(self, database):
        with pytest.raises(DatabaseError):
            with database.session() as db:
                HistoryRepository(db).create(12345, ".env")

    def test_failed_operation_leaves_store_usable(self, database, make_project):
        with pytest.raises(DatabaseError):
            with database.session() as db:
                HistoryRepository(db).create(12345, ".env")

        project = make_project("after")
        assert ProjectService(database).get_project(project.id).name == "after"
