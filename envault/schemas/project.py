"""Project schemas."""

from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class ProjectCreate(BaseModel):
    """Schema for registering a project directory."""
    path: str
    name: Optional[str] = None
    icon: Optional[str] = None
    icon_color: Optional[str] = None

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Path cannot be empty")
        return v


class ProjectUpdate(BaseModel):
    """Partial update. ``None`` leaves the stored value unchanged."""
    name: Optional[str] = None
    icon: Optional[str] = None
    icon_color: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be blank")
        return v


class ProjectResponse(BaseModel):
    """Schema for project response."""
    id: int
    name: str
    path: str
    icon: str
    icon_color: str
    active_environment: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActiveEnvironmentResponse(BaseModel):
    active_environment: Optional[str] = None
