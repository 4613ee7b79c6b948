"""Attendance service — check-in / check-out within a gym."""

from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceConflictError, ResourceNotFoundError
from gymdesk.models.attendance import AttendanceRecord
from gymdesk.services.auth_service import auth_service


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AttendanceService:

    @staticmethod
    def today() -> date:
        return _utcnow().date()

    @staticmethod
    def _open_record(db: Session, gym_id: int, user_id: int) -> Optional[AttendanceRecord]:
        return db.query(AttendanceRecord).filter(
            AttendanceRecord.gym_id == gym_id,
            AttendanceRecord.user_id == user_id,
            AttendanceRecord.date == _utcnow().date(),
            AttendanceRecord.check_out_time.is_(None),
        ).first()

    @staticmethod
    def check_in(
        db: Session,
        gym_id: int,
        user_id: int,
        marked_by: Optional[int] = None,
        method: str = "manual",
    ) -> AttendanceRecord:
        """Check a gym member in. One open check-in per member per day."""
        auth_service.get_gym_user(db, user_id, gym_id)
        if AttendanceService._open_record(db, gym_id, user_id):
            raise ResourceConflictError(f"User {user_id} is already checked in")
        now = _utcnow()
        record = AttendanceRecord(
            gym_id=gym_id,
            user_id=user_id,
            marked_by=marked_by,
            date=now.date(),
            check_in_time=now,
            check_in_method=method,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def check_out(db: Session, gym_id: int, user_id: int) -> AttendanceRecord:
        record = AttendanceService._open_record(db, gym_id, user_id)
        if not record:
            raise ResourceNotFoundError(f"No open check-in for user {user_id}")
        now = _utcnow()
        record.check_out_time = now
        record.duration_minutes = int((now - record.check_in_time).total_seconds() // 60)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def list_for_date(db: Session, gym_id: int, day: date) -> List[AttendanceRecord]:
        return (
            db.query(AttendanceRecord)
            .filter(AttendanceRecord.gym_id == gym_id, AttendanceRecord.date == day)
            .order_by(AttendanceRecord.check_in_time.desc())
            .all()
        )

    @staticmethod
    def list_for_user(db: Session, gym_id: int, user_id: int, limit: int = 50) -> List[AttendanceRecord]:
        return (
            db.query(AttendanceRecord)
            .filter(AttendanceRecord.gym_id == gym_id, AttendanceRecord.user_id == user_id)
            .order_by(AttendanceRecord.check_in_time.desc())
            .limit(limit)
            .all()
        )


attendance_service = AttendanceService()
