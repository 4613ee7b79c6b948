"""Role service — role CRUD, archiving, and permission assignment."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from gymdesk.core.constants import LevelEnum
from gymdesk.core.exceptions import (
    AuthorizationError, ResourceConflictError, ResourceNotFoundError, ValidationError,
)
from gymdesk.db.migrations.rename_role import apply_role_rename
from gymdesk.models.permission import Permission, RolePermissionXref
from gymdesk.models.role import Role
from gymdesk.schemas.schemas import RoleCreate, RoleUpdate

logger = logging.getLogger("gymdesk")


class RoleService:
    """Manages role definitions and their permission grants."""

    @staticmethod
    def _ensure_unique(
        db: Session, name: Optional[str], label: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        if name:
            query = db.query(Role).filter(Role.name == name.upper())
            if exclude_id is not None:
                query = query.filter(Role.id != exclude_id)
            if query.first():
                raise ResourceConflictError(f"Role with name {name.upper()} already exists")
        if label:
            query = db.query(Role).filter(Role.label == label)
            if exclude_id is not None:
                query = query.filter(Role.id != exclude_id)
            if query.first():
                raise ResourceConflictError(f"Role with label {label} already exists")

    @staticmethod
    def create(db: Session, data: RoleCreate, created_by: Optional[int] = None) -> Role:
        """Create a role.

        Raises:
            ResourceConflictError: If ``name`` or ``label`` is already taken.
        """
        RoleService._ensure_unique(db, data.name, data.label)
        role = Role(
            name=data.name.upper(),
            label=data.label,
            description=data.description,
            level=data.level,
            sort_order=data.sort_order,
            is_system=data.is_system,
            created_by=created_by,
        )
        db.add(role)
        db.commit()
        db.refresh(role)
        logger.info("Role %s created by %s", role.name, created_by)
        return role

    @staticmethod
    def list_roles(db: Session, include_archived: bool = False) -> List[Role]:
        query = db.query(Role)
        if not include_archived:
            query = query.filter(Role.is_archived == False)  # noqa: E712
        return query.order_by(Role.sort_order, Role.id).all()

    @staticmethod
    def get(db: Session, role_id: int) -> Role:
        role = db.query(Role).filter(Role.id == role_id).first()
        if not role:
            raise ResourceNotFoundError(f"Role with ID {role_id} not found")
        return role

    @staticmethod
    def get_by_name(db: Session, name: str) -> Role:
        role = db.query(Role).filter(Role.name == name.upper()).first()
        if not role:
            raise ResourceNotFoundError(f"Role with name {name} not found")
        return role

    @staticmethod
    def update(
        db: Session, role_id: int, data: RoleUpdate, updated_by: Optional[int] = None
    ) -> Role:
        """Update a role's name, label, description or sort order.

        System roles keep their name; everything else is editable.
        """
        role = RoleService.get(db, role_id)
        if data.name and data.name.upper() != role.name and role.is_system:
            raise AuthorizationError(f"System role {role.name} cannot be renamed")
        RoleService._ensure_unique(db, data.name, data.label, exclude_id=role.id)

        try:
            if data.name and data.name.upper() != role.name:
                # lookup, role name and grants move together
                apply_role_rename(
                    db, role.code, data.name, data.label or role.label,
                    require_lookup_type=False,
                )
            if data.label:
                role.label = data.label
            if data.description is not None:
                role.description = data.description
            if data.sort_order is not None:
                role.sort_order = data.sort_order
            role.updated_by = updated_by
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(role)
        return role

    @staticmethod
    def archive(db: Session, role_id: int, archived_by: Optional[int] = None) -> Role:
        """Soft-archive a role. System roles are protected."""
        role = RoleService.get(db, role_id)
        if role.is_system:
            raise AuthorizationError(f"System role {role.name} cannot be archived")
        if role.is_archived:
            return role
        role.is_archived = True
        role.archived_at = datetime.now(timezone.utc)
        role.archived_by = archived_by
        db.commit()
        db.refresh(role)
        logger.info("Role %s archived by %s", role.name, archived_by)
        return role

    @staticmethod
    def delete(db: Session, role_id: int) -> None:
        """Delete a role and its permission grants. System roles are protected."""
        role = RoleService.get(db, role_id)
        if role.is_system:
            raise AuthorizationError(f"System role {role.name} cannot be deleted")
        name = role.name
        db.query(RolePermissionXref).filter(RolePermissionXref.role == role.code).delete(
            synchronize_session=False
        )
        db.delete(role)
        db.commit()
        logger.info("Role %s deleted", name)

    @staticmethod
    def _get_permission(db: Session, permission_id: int) -> Permission:
        permission = db.query(Permission).filter(Permission.id == permission_id).first()
        if not permission:
            raise ResourceNotFoundError(f"Permission with ID {permission_id} not found")
        return permission

    @staticmethod
    def assign_permission(
        db: Session, role_id: int, permission_id: int, created_by: Optional[int] = None
    ) -> RolePermissionXref:
        """Grant a permission to a role. Re-granting returns the existing row.

        Raises:
            ValidationError: A system-level permission on a gym-level role.
        """
        role = RoleService.get(db, role_id)
        permission = RoleService._get_permission(db, permission_id)
        if permission.level == LevelEnum.system and role.level != LevelEnum.system:
            raise ValidationError(
                f"System permission {permission.code} cannot be granted to gym role {role.name}"
            )

        existing = db.query(RolePermissionXref).filter(
            RolePermissionXref.role == role.code,
            RolePermissionXref.permission_id == permission.id,
        ).first()
        if existing:
            return existing

        xref = RolePermissionXref(
            role=role.code, permission_id=permission.id, created_by=created_by
        )
        db.add(xref)
        db.commit()
        db.refresh(xref)
        logger.info("Granted %s to %s", permission.code, role.code)
        return xref

    @staticmethod
    def remove_permission(db: Session, role_id: int, permission_id: int) -> bool:
        """Revoke a permission from a role; returns False when it was not granted."""
        role = RoleService.get(db, role_id)
        RoleService._get_permission(db, permission_id)
        deleted = db.query(RolePermissionXref).filter(
            RolePermissionXref.role == role.code,
            RolePermissionXref.permission_id == permission_id,
        ).delete(synchronize_session=False)
        db.commit()
        return deleted > 0

    @staticmethod
    def get_role_permissions(db: Session, role_id: int) -> List[Permission]:
        role = RoleService.get(db, role_id)
        return (
            db.query(Permission)
            .join(RolePermissionXref, RolePermissionXref.permission_id == Permission.id)
            .filter(RolePermissionXref.role == role.code)
            .order_by(Permission.module, Permission.code)
            .all()
        )


role_service = RoleService()
