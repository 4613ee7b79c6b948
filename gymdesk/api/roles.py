"""Roles API router — role definitions and permission grants."""

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from gymdesk.core.guards import GymContext, require_authenticated, require_super_admin
from gymdesk.db.seeds.seed_defaults import seed_defaults
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import (
    MessageResponse, PermissionOut, RoleCreate, RoleOut, RoleUpdate,
)
from gymdesk.services.audit_service import audit_service
from gymdesk.services.role_service import role_service

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/", response_model=List[RoleOut])
async def list_roles(
    include_archived: bool = Query(False),
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return role_service.list_roles(db, include_archived)


@router.post("/", response_model=RoleOut, status_code=201)
async def create_role(
    body: RoleCreate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    """Create a role (superadmin only)."""
    role = role_service.create(db, body, created_by=ctx.user_id)
    audit_service.log_from_request(
        db, request, ctx,
        action="role.created",
        resource_type="role",
        resource_id=str(role.id),
        new_value=body.model_dump(mode="json"),
    )
    return role


@router.post("/seed")
async def seed_roles(
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    """Upsert the default roles, permissions and lookups."""
    created = seed_defaults(db)
    audit_service.log_from_request(
        db, request, ctx, action="system.seeded", resource_type="system", new_value=created,
    )
    return {"created": created}


@router.get("/{role_id}", response_model=RoleOut)
async def get_role(
    role_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return role_service.get(db, role_id)


@router.put("/{role_id}", response_model=RoleOut)
async def update_role(
    role_id: int,
    body: RoleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    role = role_service.update(db, role_id, body, updated_by=ctx.user_id)
    audit_service.log_from_request(
        db, request, ctx,
        action="role.updated",
        resource_type="role",
        resource_id=str(role.id),
        new_value=body.model_dump(mode="json", exclude_unset=True),
    )
    return role


@router.post("/{role_id}/archive", response_model=RoleOut)
async def archive_role(
    role_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    role = role_service.archive(db, role_id, archived_by=ctx.user_id)
    audit_service.log_from_request(
        db, request, ctx, action="role.archived", resource_type="role", resource_id=str(role_id),
    )
    return role


@router.delete("/{role_id}", response_model=MessageResponse)
async def delete_role(
    role_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    role_service.delete(db, role_id)
    audit_service.log_from_request(
        db, request, ctx, action="role.deleted", resource_type="role", resource_id=str(role_id),
    )
    return MessageResponse(message="Role deleted")


@router.get("/{role_id}/permissions", response_model=List[PermissionOut])
async def get_role_permissions(
    role_id: int,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_authenticated),
):
    return role_service.get_role_permissions(db, role_id)


@router.post("/{role_id}/permissions/{permission_id}", response_model=MessageResponse)
async def assign_permission(
    role_id: int,
    permission_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    """Grant a permission to a role. Granting twice is a no-op."""
    role_service.assign_permission(db, role_id, permission_id, created_by=ctx.user_id)
    audit_service.log_from_request(
        db, request, ctx,
        action="role.permission_assigned",
        resource_type="role",
        resource_id=str(role_id),
        new_value={"permission_id": permission_id},
    )
    return MessageResponse(message="Permission assigned")


@router.delete("/{role_id}/permissions/{permission_id}", response_model=MessageResponse)
async def remove_permission(
    role_id: int,
    permission_id: int,
    request: Request,
    db: Session = Depends(get_db),
    ctx: GymContext = Depends(require_super_admin),
):
    removed = role_service.remove_permission(db, role_id, permission_id)
    if removed:
        audit_service.log_from_request(
            db, request, ctx,
            action="role.permission_removed",
            resource_type="role",
            resource_id=str(role_id),
            old_value={"permission_id": permission_id},
        )
    return MessageResponse(message="Permission removed" if removed else "Permission was not assigned")
