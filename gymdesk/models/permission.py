"""Permission and role-permission cross-reference models."""

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from gymdesk.core.constants import LevelEnum
from gymdesk.db.base import Base


class Permission(Base):
    """A grantable capability, e.g. ``trainers.manage``."""
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    module = Column(String(50), nullable=False, index=True)
    description = Column(String(255), nullable=True)
    level = Column(Enum(LevelEnum), nullable=False, default=LevelEnum.gym)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)


class RolePermissionXref(Base):
    """Grant of a permission to a role code (``client``, ``trainer``, ...)."""
    __tablename__ = "role_permission_xref"
    __table_args__ = (
        UniqueConstraint("role", "permission_id", name="uq_role_permission"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    role = Column(String(50), nullable=False, index=True)
    permission_id = Column(
        Integer, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False
    )
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    permission = relationship("Permission", lazy="joined")
