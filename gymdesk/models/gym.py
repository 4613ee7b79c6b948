"""Gym (tenant) model."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from gymdesk.db.base import Base


class Gym(Base):
    """An isolated customer organization; all domain rows carry its id."""
    __tablename__ = "gyms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
