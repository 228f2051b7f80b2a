"""Data access layer."""

from .base import BaseRepository
from .project_repository import ProjectRepository
from .history_repository import HistoryRepository

__all__ = ["BaseRepository", "ProjectRepository", "HistoryRepository"]
