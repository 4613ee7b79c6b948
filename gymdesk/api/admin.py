"""Admin / Audit API router."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gymdesk.api.auth import user_out
from gymdesk.core.constants import ADMIN_ROLES, Roles
from gymdesk.core.exceptions import AuthorizationError
from gymdesk.core.guards import AccessGuard, GymContext, ScopeMode, require_super_admin
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import AuditLogOut, GymCreate, GymOut, UserCreateRequest, UserOut
from gymdesk.services.audit_service import audit_service
from gymdesk.services.auth_service import auth_service
from gymdesk.services.gym_service import gym_service

router = APIRouter(prefix="/admin", tags=["admin"])

gym_admin_guard = AccessGuard(Roles.SUPERADMIN, *ADMIN_ROLES, scope=ScopeMode.required)
audit_guard = AccessGuard(Roles.SUPERADMIN, scope=ScopeMode.optional)


@router.get("/gyms", response_model=List[GymOut])
async def list_gyms(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return gym_service.list_gyms(db)


@router.post("/gyms", response_model=GymOut, status_code=201)
async def create_gym(
    body: GymCreate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    """Register a new gym (tenant)."""
    gym = gym_service.create(db, body)
    audit_service.log_from_request(
        db, request, ctx,
        action="gym.created",
        resource_type="gym",
        resource_id=str(gym.id),
        new_value=body.model_dump(mode="json"),
    )
    return gym


@router.post("/users", response_model=UserOut, status_code=201)
async def create_gym_user(
    body: UserCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(gym_admin_guard),
):
    """Create a user inside the gym in scope.

    Gym admins can only create users in their own gym; superadmins pick the
    gym with ``?gymId=``.
    """
    if body.role.lower() == Roles.SUPERADMIN:
        # platform accounts are seeded, never created through a gym
        raise AuthorizationError("Cannot create superadmin users")
    user = auth_service.create_user(
        db, body.email, body.password, body.full_name, body.role, gym_id=ctx.gym_id,
    )
    audit_service.log_from_request(
        db, request, ctx,
        action="user.created",
        resource_type="user",
        resource_id=str(user.id),
        new_value={"email": user.email, "role": user.role.code},
    )
    return user_out(user)


@router.get("/audit")
async def get_audit_logs(
    action: Optional[str] = Query(None),
    resource_type: Optional[str] = Query(None),
    actor_id: Optional[int] = Query(None),
    since: Optional[datetime] = Query(None),
    until: Optional[datetime] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(audit_guard),
):
    """Query audit logs (superadmin only); ``?gymId=`` narrows to one gym."""
    result = audit_service.query_logs(
        db,
        gym_id=ctx.gym_id,
        actor_id=actor_id,
        action=action,
        resource_type=resource_type,
        since=since,
        until=until,
        page=page,
        page_size=page_size,
    )
    return {
        "logs": [
            AuditLogOut.model_validate(log)
            for log in result["logs"]
        ],
        "total": result["total"],
        "page": result["page"],
    }
