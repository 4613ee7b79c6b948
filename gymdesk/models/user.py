"""User model."""

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import relationship
from gymdesk.core.constants import UserStatusEnum
from gymdesk.db.base import Base


class User(Base):
    """Platform user. ``gym_id`` is null for platform superadmins."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    gym_id = Column(Integer, ForeignKey("gyms.id"), nullable=True, index=True)
    status = Column(Enum(UserStatusEnum), default=UserStatusEnum.active, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    role = relationship("Role", lazy="joined")
    gym = relationship("Gym", lazy="joined")
