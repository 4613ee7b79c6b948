"""Permission service — permission CRUD and role-code lookups."""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from gymdesk.core.constants import LevelEnum, Roles
from gymdesk.core.exceptions import ResourceConflictError, ResourceNotFoundError, ValidationError
from gymdesk.models.permission import Permission, RolePermissionXref
from gymdesk.models.role import Role
from gymdesk.models.user import User
from gymdesk.schemas.schemas import PermissionCreate, PermissionUpdate

logger = logging.getLogger("gymdesk")


class PermissionService:
    """Permission records and the role-code → permission cross-reference."""

    # ---- Permissions ----

    @staticmethod
    def list_permissions(
        db: Session, module: Optional[str] = None, level: Optional[LevelEnum] = None
    ) -> List[Permission]:
        query = db.query(Permission).filter(Permission.is_active == True)  # noqa: E712
        if module:
            query = query.filter(Permission.module == module)
        if level:
            query = query.filter(Permission.level == level)
        return query.order_by(Permission.module, Permission.code).all()

    @staticmethod
    def get_by_code(db: Session, code: str) -> Permission:
        permission = db.query(Permission).filter(Permission.code == code).first()
        if not permission:
            raise ResourceNotFoundError(f"Permission with code {code} not found")
        return permission

    @staticmethod
    def create(db: Session, data: PermissionCreate) -> Permission:
        if db.query(Permission).filter(Permission.code == data.code).first():
            raise ResourceConflictError(f"Permission with code {data.code} already exists")
        permission = Permission(**data.model_dump())
        db.add(permission)
        db.commit()
        db.refresh(permission)
        return permission

    @staticmethod
    def update(db: Session, code: str, data: PermissionUpdate) -> Permission:
        permission = PermissionService.get_by_code(db, code)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(permission, field, value)
        db.commit()
        db.refresh(permission)
        return permission

    @staticmethod
    def delete(db: Session, code: str) -> Permission:
        """Soft delete: the permission is deactivated, grants are kept."""
        permission = PermissionService.get_by_code(db, code)
        permission.is_active = False
        db.commit()
        db.refresh(permission)
        return permission

    # ---- Role permissions ----

    @staticmethod
    def get_permissions_by_role(db: Session, role: str) -> List[Permission]:
        return (
            db.query(Permission)
            .join(RolePermissionXref, RolePermissionXref.permission_id == Permission.id)
            .filter(RolePermissionXref.role == role, Permission.is_active == True)  # noqa: E712
            .order_by(Permission.module, Permission.code)
            .all()
        )

    @staticmethod
    def get_permission_codes_by_role(db: Session, role: str) -> List[str]:
        return [p.code for p in PermissionService.get_permissions_by_role(db, role)]

    @staticmethod
    def get_all_roles_with_permissions(db: Session) -> Dict[str, List[Permission]]:
        """All grants grouped by role code."""
        rows = (
            db.query(RolePermissionXref)
            .order_by(RolePermissionXref.role, RolePermissionXref.permission_id)
            .all()
        )
        grouped: Dict[str, List[Permission]] = defaultdict(list)
        for row in rows:
            grouped[row.role].append(row.permission)
        return dict(grouped)

    @staticmethod
    def set_role_permissions(
        db: Session, role: str, permission_codes: List[str]
    ) -> List[Permission]:
        """Replace the role's grants with ``permission_codes``.

        Unknown codes are skipped. Delete and insert commit together.

        Raises:
            ResourceNotFoundError: No role has code ``role``.
            ValidationError: A system-level permission on a gym-level role.
        """
        role_row = db.query(Role).filter(Role.name == role.upper()).first()
        if not role_row:
            raise ResourceNotFoundError(f"Role {role} not found")
        role = role_row.code

        permissions = (
            db.query(Permission).filter(Permission.code.in_(permission_codes)).all()
            if permission_codes else []
        )
        skipped = set(permission_codes) - {p.code for p in permissions}
        if skipped:
            logger.warning("Skipping unknown permission codes for %s: %s", role, sorted(skipped))

        if role_row.level != LevelEnum.system:
            system_codes = sorted(p.code for p in permissions if p.level == LevelEnum.system)
            if system_codes:
                raise ValidationError(
                    f"System permissions {', '.join(system_codes)} cannot be granted "
                    f"to gym role {role_row.name}"
                )

        try:
            db.query(RolePermissionXref).filter(RolePermissionXref.role == role).delete(
                synchronize_session=False
            )
            for permission in permissions:
                db.add(RolePermissionXref(role=role, permission_id=permission.id))
            db.commit()
        except Exception:
            db.rollback()
            raise
        return sorted(permissions, key=lambda p: (p.module, p.code))

    # ---- User permissions (via role) ----

    @staticmethod
    def user_permission_codes(db: Session, user_id: int) -> List[str]:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ResourceNotFoundError(f"User with ID {user_id} not found")
        role_code = user.role.code if user.role else Roles.CLIENT
        return PermissionService.get_permission_codes_by_role(db, role_code)

    @staticmethod
    def user_has_permission(db: Session, user_id: int, permission_code: str) -> bool:
        return permission_code in PermissionService.user_permission_codes(db, user_id)


permission_service = PermissionService()
