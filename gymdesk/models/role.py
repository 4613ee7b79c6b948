"""Role model for RBAC."""

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Enum, func,
)
from gymdesk.core.constants import LevelEnum
from gymdesk.db.base import Base


class Role(Base):
    """Platform or gym-level role.

    ``name`` is the upper-case system code (``CLIENT``); :attr:`code` is the
    lower-case form carried in tokens, the USER_ROLE lookup and xref rows.
    """
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    label = Column(String(100), unique=True, nullable=False)
    description = Column(String(255), nullable=True)
    level = Column(Enum(LevelEnum), nullable=False, default=LevelEnum.gym)
    sort_order = Column(Integer, nullable=False, default=0)
    is_system = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, nullable=True)
    updated_by = Column(Integer, nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)
    archived_at = Column(DateTime, nullable=True)
    archived_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def code(self) -> str:
        return self.name.lower()
