"""Generic controlled-vocabulary tables."""

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from gymdesk.db.base import Base


class LookupType(Base):
    """Groups lookup values, e.g. ``USER_ROLE`` or ``TICKET_STATUS``."""
    __tablename__ = "lookup_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    lookups = relationship(
        "Lookup",
        back_populates="lookup_type",
        order_by="Lookup.display_order",
        lazy="selectin",
    )


class Lookup(Base):
    """A single vocabulary value, unique by code within its type."""
    __tablename__ = "lookups"
    __table_args__ = (
        UniqueConstraint("lookup_type_id", "code", name="uq_lookup_type_code"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    lookup_type_id = Column(
        Integer, ForeignKey("lookup_types.id", ondelete="CASCADE"), nullable=False
    )
    code = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    value = Column(String(100), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    lookup_type = relationship("LookupType", back_populates="lookups")
