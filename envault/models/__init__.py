"""Database models."""

from .project import Project
from .environment import Environment
from .env_history import EnvHistory

__all__ = ["Project", "Environment", "EnvHistory"]
