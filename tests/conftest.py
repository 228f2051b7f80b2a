"""Shared test fixtures for the Envault test suite.

Every test gets its own SQLite file under pytest's tmp_path, so tests are
fully isolated and never touch the real per-user data directory.
"""

import os
import tempfile

# Point the app at a throwaway data dir before any envault imports.
os.environ["ENVAULT_DATA_DIR"] = tempfile.mkdtemp(prefix="envault-test-")
os.environ["ENVAULT_LOG_FORMAT"] = "text"

import pytest
from fastapi.testclient import TestClient

from envault.database import Database, get_database, initialize
from envault.main import app
from envault.schemas.project import ProjectCreate
from envault.services import ProjectService


@pytest.fixture()
def database(tmp_path):
    """Fresh, migrated database for one test."""
    db = initialize(tmp_path / "data" / "envault.db")
    yield db
    db.close()


@pytest.fixture()
def client(database):
    """FastAPI TestClient with the database dependency overridden."""

    def _override_get_database() -> Database:
        return database

    app.dependency_overrides[get_database] = _override_get_database
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def project_dir(tmp_path):
    """Empty project directory."""
    path = tmp_path / "my-app"
    path.mkdir()
    return path


@pytest.fixture()
def make_project(database, tmp_path):
    """Factory: create a directory with the given env files and register it."""

    def _make(name: str = "demo", files: dict = None, **overrides):
        path = tmp_path / name
        path.mkdir()
        for filename, content in (files or {}).items():
            (path / filename).write_text(content)
        return ProjectService(database).add_project(ProjectCreate(path=str(path), **overrides))

    return _make
