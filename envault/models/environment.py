"""Environment model.

Reserved schema: no current operation populates or reads this table.
"""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Environment(Base):
    """Per-project environment definitions."""

    __tablename__ = "environments"
    __table_args__ = (
        UniqueConstraint("project_id", "name"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    file_path = Column(Text, nullable=False)
    is_readonly = Column(Integer, default=0, server_default="0")
    created_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="environments")
