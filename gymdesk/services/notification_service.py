"""Notification service — in-app notifications within a gym."""

from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from gymdesk.core.exceptions import ResourceNotFoundError
from gymdesk.models.notification import Notification
from gymdesk.schemas.schemas import NotificationCreate
from gymdesk.services.auth_service import auth_service


class NotificationService:

    @staticmethod
    def create(
        db: Session, gym_id: int, data: NotificationCreate, created_by: int
    ) -> Notification:
        """Notify a user of the same gym."""
        auth_service.get_gym_user(db, data.user_id, gym_id)
        notification = Notification(gym_id=gym_id, created_by=created_by, **data.model_dump())
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    @staticmethod
    def list_for_user(
        db: Session, gym_id: int, user_id: int, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        query = db.query(Notification).filter(
            Notification.gym_id == gym_id, Notification.user_id == user_id
        )
        if unread_only:
            query = query.filter(Notification.is_read == False)  # noqa: E712
        return query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()

    @staticmethod
    def unread_count(db: Session, gym_id: int, user_id: int) -> int:
        return db.query(Notification).filter(
            Notification.gym_id == gym_id,
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        ).count()

    @staticmethod
    def mark_read(db: Session, gym_id: int, user_id: int, notification_id: int) -> Notification:
        notification = db.query(Notification).filter(
            Notification.id == notification_id,
            Notification.gym_id == gym_id,
            Notification.user_id == user_id,
        ).first()
        if not notification:
            raise ResourceNotFoundError(f"Notification {notification_id} not found")
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(notification)
        return notification

    @staticmethod
    def mark_all_read(db: Session, gym_id: int, user_id: int) -> int:
        updated = db.query(Notification).filter(
            Notification.gym_id == gym_id,
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        ).update(
            {"is_read": True, "read_at": datetime.now(timezone.utc)},
            synchronize_session=False,
        )
        db.commit()
        return updated


notification_service = NotificationService()
