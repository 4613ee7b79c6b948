"""Notifications API router."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gymdesk.core.constants import GYM_ROLES, Roles, STAFF_ROLES
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import NotificationCreate, NotificationOut
from gymdesk.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])

sender_guard = AccessGuard(Roles.SUPERADMIN, *STAFF_ROLES, scope=ScopeMode.required)
member_guard = AccessGuard(*GYM_ROLES, scope=ScopeMode.required)


@router.post("/", response_model=NotificationOut, status_code=201)
async def send_notification(
    body: NotificationCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(sender_guard),
):
    return notification_service.create(db, ctx.gym_id, body, created_by=ctx.user_id)


@router.get("/me", response_model=List[NotificationOut])
async def my_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    return notification_service.list_for_user(db, ctx.gym_id, ctx.user_id, unread_only, limit)


@router.get("/me/unread-count")
async def unread_count(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    return {"count": notification_service.unread_count(db, ctx.gym_id, ctx.user_id)}


@router.post("/me/read-all")
async def mark_all_read(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    return {"updated": notification_service.mark_all_read(db, ctx.gym_id, ctx.user_id)}


@router.post("/{notification_id}/read", response_model=NotificationOut)
async def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(member_guard),
):
    return notification_service.mark_read(db, ctx.gym_id, ctx.user_id, notification_id)
