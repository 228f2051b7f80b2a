"""Repository for activation history."""

from typing import List

from sqlalchemy.exc import IntegrityError

from ..models import EnvHistory
from ..exceptions import DatabaseError
from .base import BaseRepository


class HistoryRepository(BaseRepository[EnvHistory]):
    """Append-only access to env_history rows."""

    model_class = EnvHistory

    def create(self, project_id: int, env_name: str) -> EnvHistory:
        """Append a history entry. No existence check beyond the foreign key."""
        entry = EnvHistory(project_id=project_id, env_name=env_name)
        self.db.add(entry)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise DatabaseError("Failed to record environment history", e) from e
        self.db.refresh(entry)
        return entry

    def get_by_project(self, project_id: int) -> List[EnvHistory]:
        """All activations for a project, newest first."""
        return self.db.query(EnvHistory).filter(
            EnvHistory.project_id == project_id
        ).order_by(EnvHistory.activated_at.desc(), EnvHistory.id.desc()).all()
