"""Business logic services."""

from .project_service import ProjectService
from .environment_service import EnvironmentService
from .env_scanner import scan_env_files, parse_env_content

__all__ = ["ProjectService", "EnvironmentService", "scan_env_files", "parse_env_content"]
