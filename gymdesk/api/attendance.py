"""Attendance API router — check-in and check-out."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gymdesk.core.constants import Roles, STAFF_ROLES
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import AttendanceOut, MarkAttendanceRequest
from gymdesk.services.attendance_service import attendance_service

router = APIRouter(prefix="/attendance", tags=["attendance"])

staff_guard = AccessGuard(Roles.SUPERADMIN, *STAFF_ROLES, scope=ScopeMode.required)
client_guard = AccessGuard(Roles.CLIENT, scope=ScopeMode.required)


@router.post("/check-in", response_model=AttendanceOut, status_code=201)
async def check_in(
    body: MarkAttendanceRequest,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    """Mark a member present."""
    return attendance_service.check_in(
        db, ctx.gym_id, body.user_id, marked_by=ctx.user_id, method=body.check_in_method,
    )


@router.post("/check-out/{user_id}", response_model=AttendanceOut)
async def check_out(
    user_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    return attendance_service.check_out(db, ctx.gym_id, user_id)


@router.get("/", response_model=List[AttendanceOut])
async def attendance_for_day(
    day: Optional[date] = Query(None),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(staff_guard),
):
    """Records for ``day`` (default: today, UTC)."""
    return attendance_service.list_for_date(db, ctx.gym_id, day or attendance_service.today())


@router.get("/me", response_model=List[AttendanceOut])
async def my_attendance(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(client_guard),
):
    return attendance_service.list_for_user(db, ctx.gym_id, ctx.user_id, limit)
