"""Activation history model."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class EnvHistory(Base):
    """Append-only log of environment activations."""

    __tablename__ = "env_history"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    env_name = Column(Text, nullable=False)
    activated_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="history")
