"""Permissions API router."""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gymdesk.core.constants import LevelEnum
from gymdesk.core.guards import GymContext, require_authenticated, require_super_admin
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import (
    PermissionCreate, PermissionOut, PermissionUpdate, RolePermissionsAssign,
)
from gymdesk.services.audit_service import audit_service
from gymdesk.services.permission_service import permission_service

router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.get("/", response_model=List[PermissionOut])
async def list_permissions(
    module: Optional[str] = Query(None),
    level: Optional[LevelEnum] = Query(None),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return permission_service.list_permissions(db, module, level)


@router.get("/me", response_model=List[str])
async def my_permissions(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    """Permission codes granted to the caller's role."""
    return permission_service.get_permission_codes_by_role(db, ctx.role)


@router.get("/roles", response_model=Dict[str, List[PermissionOut]])
async def all_role_permissions(
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return permission_service.get_all_roles_with_permissions(db)


@router.get("/roles/{role}", response_model=List[PermissionOut])
async def role_permissions(
    role: str,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return permission_service.get_permissions_by_role(db, role)


@router.put("/roles/{role}", response_model=List[PermissionOut])
async def set_role_permissions(
    role: str,
    body: RolePermissionsAssign,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    """Replace every permission granted to ``role``."""
    permissions = permission_service.set_role_permissions(db, role, body.permission_codes)
    audit_service.log_from_request(
        db, request, ctx,
        action="role.permissions_replaced",
        resource_type="role",
        resource_id=role,
        new_value=[p.code for p in permissions],
    )
    return permissions


@router.post("/", response_model=PermissionOut, status_code=201)
async def create_permission(
    body: PermissionCreate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return permission_service.create(db, body)


@router.get("/{code}", response_model=PermissionOut)
async def get_permission(
    code: str,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return permission_service.get_by_code(db, code)


@router.put("/{code}", response_model=PermissionOut)
async def update_permission(
    code: str,
    body: PermissionUpdate,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return permission_service.update(db, code, body)


@router.delete("/{code}", response_model=PermissionOut)
async def delete_permission(
    code: str,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    return permission_service.delete(db, code)
