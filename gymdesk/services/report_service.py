"""Report service — headline counts for one gym or the whole platform."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from gymdesk.core.constants import Roles
from gymdesk.models.attendance import AttendanceRecord
from gymdesk.models.role import Role
from gymdesk.models.support_ticket import SupportTicket
from gymdesk.models.trainer import Trainer
from gymdesk.models.user import User
from gymdesk.services.support_service import CLOSED_STATUSES


class ReportService:

    @staticmethod
    def summary(db: Session, gym_id: Optional[int]) -> dict:
        """Counts scoped to ``gym_id``; ``None`` aggregates across all gyms."""
        members = (
            db.query(User)
            .join(Role, User.role_id == Role.id)
            .filter(Role.name == Roles.CLIENT.upper())
        )
        trainers = db.query(Trainer).filter(Trainer.is_active == True)  # noqa: E712
        attendance = db.query(AttendanceRecord).filter(
            AttendanceRecord.date == datetime.now(timezone.utc).date()
        )
        tickets = db.query(SupportTicket).filter(SupportTicket.status.notin_(CLOSED_STATUSES))

        if gym_id is not None:
            members = members.filter(User.gym_id == gym_id)
            trainers = trainers.filter(Trainer.gym_id == gym_id)
            attendance = attendance.filter(AttendanceRecord.gym_id == gym_id)
            tickets = tickets.filter(SupportTicket.gym_id == gym_id)

        return {
            "gym_id": gym_id,
            "scope": "gym" if gym_id is not None else "platform",
            "total_members": members.count(),
            "total_trainers": trainers.count(),
            "attendance_today": attendance.count(),
            "open_tickets": tickets.count(),
        }


report_service = ReportService()
