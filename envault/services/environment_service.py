"""Environment activation, env file reading and activation history.

Activation order:
    1. look up the project root
    2. back up the current .env to .env.backup (single generation)
    3. copy the chosen file over .env
    4. record the active environment and append a history row

The database is only written after every file operation succeeded. The two
stores are not updated atomically: a crash between steps 3 and 4 leaves .env
switched while the database still names the previous environment.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from ..database import Database
from ..exceptions import FilesystemError, ValidationError
from ..repositories.history_repository import HistoryRepository
from ..repositories.project_repository import ProjectRepository
from ..schemas.env_file import EnvFileContent, EnvHistoryResponse
from .env_scanner import BACKUP_FILE, ENV_FILE, parse_env_content, validate_env_name

logger = logging.getLogger(__name__)


class EnvironmentService:
    """Operations on a registered project's env files."""

    def __init__(self, database: Database):
        self.database = database

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def activate(self, project_id: int, env_name: str) -> None:
        """Make *env_name* the project's effective ``.env``.

        Activating ``.env`` itself skips every file operation and only records
        the state change, even when no ``.env`` exists yet.

        Raises:
            ProjectNotFoundError: unknown project id
            ValidationError: bad name, or the source file does not exist
            FilesystemError: backup or copy failed (database left untouched)
        """
        validate_env_name(env_name)
        root = self._project_root(project_id)

        if env_name != ENV_FILE:
            source = root / env_name
            target = root / ENV_FILE

            if not source.exists():
                raise ValidationError(
                    f"Environment file {env_name} does not exist", field="env_name"
                )

            if target.exists():
                self._copy(target, root / BACKUP_FILE)
                logger.info(f"Backed up {target} to {BACKUP_FILE}", extra={"project_id": project_id})

            self._copy(source, target)

        with self.database.session() as db:
            ProjectRepository(db).set_active_environment(project_id, env_name)
            HistoryRepository(db).create(project_id, env_name)

        logger.info(
            f"Activated {env_name} for project {project_id}",
            extra={"project_id": project_id, "env_name": env_name},
        )

    def get_active_environment(self, project_id: int) -> Optional[str]:
        with self.database.session() as db:
            return ProjectRepository(db).get_active_environment(project_id)

    def read_env_file(self, project_id: int, env_name: str) -> EnvFileContent:
        """Return the text of one env file in the project, plus its parsed lines."""
        validate_env_name(env_name, require_env_prefix=True)
        path = self._project_root(project_id) / env_name

        if not path.is_file():
            raise ValidationError(f"Environment file {env_name} does not exist", field="env_name")

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FilesystemError(f"Cannot read {path}: {e}", path=str(path)) from e

        return EnvFileContent(
            name=env_name,
            path=str(path),
            content=content,
            lines=parse_env_content(content),
        )

    def get_history(self, project_id: int) -> List[EnvHistoryResponse]:
        """Activation history for a project, newest first."""
        with self.database.session() as db:
            ProjectRepository(db).get_by_id(project_id)
            entries = HistoryRepository(db).get_by_project(project_id)
            return [EnvHistoryResponse.model_validate(e) for e in entries]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _project_root(self, project_id: int) -> Path:
        with self.database.session() as db:
            return Path(ProjectRepository(db).get_by_id(project_id).path)

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        try:
            shutil.copy(source, target)
        except OSError as e:
            logger.error(f"Copy {source} -> {target} failed: {e}")
            raise FilesystemError(f"Failed to copy {source.name} to {target.name}: {e}", path=str(target)) from e
