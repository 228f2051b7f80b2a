"""Project model."""

from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base

DEFAULT_ICON = "folder"
DEFAULT_ICON_COLOR = "#737373"


class Project(Base):
    """Registered local project directories."""

    __tablename__ = "projects"
    __table_args__ = {"sqlite_autoincrement": True}

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(Text, nullable=False)
    # Absolute filesystem path of the project root
    path = Column(Text, nullable=False, unique=True)

    # Display
    icon = Column(Text, default=DEFAULT_ICON, server_default=DEFAULT_ICON)
    icon_color = Column(Text, default=DEFAULT_ICON_COLOR, server_default=DEFAULT_ICON_COLOR)

    # Name of the .env* file last copied onto .env
    active_environment = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())

    # Relationships (rows are removed by ON DELETE CASCADE in the database)
    environments = relationship("Environment", back_populates="project", passive_deletes=True)
    history = relationship("EnvHistory", back_populates="project", passive_deletes=True)
