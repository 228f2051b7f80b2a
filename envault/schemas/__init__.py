"""Pydantic schemas for API validation."""

from .project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ActiveEnvironmentResponse,
)
from .env_file import (
    EnvFile,
    EnvLine,
    EnvFileContent,
    ActivateRequest,
    EnvHistoryResponse,
)

__all__ = [
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ActiveEnvironmentResponse",
    "EnvFile",
    "EnvLine",
    "EnvFileContent",
    "ActivateRequest",
    "EnvHistoryResponse",
]
