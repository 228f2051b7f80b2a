"""Env file, activation and history schemas."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List


class EnvFile(BaseModel):
    """A ``.env*`` file found in a project directory. Never persisted."""
    name: str
    path: str
    is_active: bool = False
    modified_at: Optional[str] = None  # "YYYY-MM-DD HH:MM:SS", UTC


class EnvLine(BaseModel):
    """One parsed line of an env file."""
    type: str  # 'comment', 'empty', 'variable' or 'invalid'
    raw: str
    key: Optional[str] = None
    value: Optional[str] = None


class EnvFileContent(BaseModel):
    """Raw text of an env file plus its line-by-line parse."""
    name: str
    path: str
    content: str
    lines: List[EnvLine] = []


class ActivateRequest(BaseModel):
    env_name: str


class EnvHistoryResponse(BaseModel):
    """Schema for an activation history entry."""
    id: int
    project_id: int
    env_name: str
    activated_at: datetime

    class Config:
        from_attributes = True
