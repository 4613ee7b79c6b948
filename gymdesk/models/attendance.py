"""Attendance (check-in / check-out) model."""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, func
from gymdesk.db.base import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, autoincrement=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    marked_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    date = Column(Date, nullable=False, index=True)
    check_in_time = Column(DateTime, nullable=False)
    check_out_time = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    check_in_method = Column(String(20), nullable=False, default="manual")
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
