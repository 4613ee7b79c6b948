"""Rename a user-role code across the USER_ROLE lookup, roles and grants.

All writes happen in one transaction: either the lookup, the role row and
every role_permission_xref row move to the new code, or nothing does.
Re-running after a successful rename changes nothing and reports the lookup
as already renamed.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from gymdesk.core.constants import USER_ROLE_LOOKUP_TYPE
from gymdesk.core.exceptions import ResourceConflictError, ResourceNotFoundError, ValidationError
from gymdesk.models.lookup import Lookup, LookupType
from gymdesk.models.permission import RolePermissionXref
from gymdesk.models.role import Role
from gymdesk.models.user import User

logger = logging.getLogger("gymdesk")


@dataclass
class RenameReport:
    old_code: str
    new_code: str
    lookup_renamed: bool = False
    already_renamed: bool = False
    role_renamed: bool = False
    xref_updated: int = 0
    xref_merged: int = 0
    old_xref_before: int = 0
    new_xref_before: int = 0
    old_xref_after: int = 0
    new_xref_after: int = 0
    new_lookup_exists: bool = False
    users_with_new_role: int = 0

    @property
    def verified(self) -> bool:
        """Post-condition: no grants left on the old code, none lost."""
        return (
            self.old_xref_after == 0
            and self.new_lookup_exists
            and self.new_xref_after == self.old_xref_before + self.new_xref_before - self.xref_merged
        )

    def as_dict(self) -> dict:
        data = asdict(self)
        data["verified"] = self.verified
        return data


def _count_xref(db: Session, code: str) -> int:
    return (
        db.query(func.count(RolePermissionXref.id))
        .filter(RolePermissionXref.role == code)
        .scalar()
    )


def _find_lookup(db: Session, lookup_type_id: int, code: str) -> Optional[Lookup]:
    return db.query(Lookup).filter(
        Lookup.lookup_type_id == lookup_type_id,
        Lookup.code == code,
    ).first()


def apply_role_rename(
    db: Session,
    old_code: str,
    new_code: str,
    new_label: Optional[str] = None,
    require_lookup_type: bool = True,
) -> RenameReport:
    """Stage the rename in ``db`` without committing.

    The caller owns the transaction. Grants that already exist on
    ``new_code`` are merged: the duplicate row on ``old_code`` is dropped
    instead of violating the (role, permission) key.

    Raises:
        ValidationError: ``old_code`` and ``new_code`` are equal or empty.
        ResourceNotFoundError: The USER_ROLE lookup type is missing and
            ``require_lookup_type`` is set.
        ResourceConflictError: Both codes exist as lookups or as roles.
    """
    old_code = old_code.strip().lower()
    new_code = new_code.strip().lower()
    if not old_code or not new_code or old_code == new_code:
        raise ValidationError("Old and new role codes must be different and non-empty")
    label = new_label or new_code.replace("_", " ").title()

    report = RenameReport(old_code=old_code, new_code=new_code)

    lookup_type = db.query(LookupType).filter(
        LookupType.code == USER_ROLE_LOOKUP_TYPE
    ).first()
    if not lookup_type and require_lookup_type:
        raise ResourceNotFoundError(f"{USER_ROLE_LOOKUP_TYPE} lookup type not found")

    report.old_xref_before = _count_xref(db, old_code)
    report.new_xref_before = _count_xref(db, new_code)

    if lookup_type:
        old_lookup = _find_lookup(db, lookup_type.id, old_code)
        new_lookup = _find_lookup(db, lookup_type.id, new_code)
        if old_lookup and new_lookup:
            raise ResourceConflictError(
                f"Both '{old_code}' and '{new_code}' exist in {USER_ROLE_LOOKUP_TYPE}"
            )
        if old_lookup:
            old_lookup.code = new_code
            old_lookup.name = label
            old_lookup.value = new_code
            report.lookup_renamed = True
        elif new_lookup:
            report.already_renamed = True

    old_role = db.query(Role).filter(Role.name == old_code.upper()).first()
    if old_role:
        if db.query(Role).filter(Role.name == new_code.upper()).first():
            raise ResourceConflictError(
                f"Both roles {old_code.upper()} and {new_code.upper()} exist"
            )
        old_role.name = new_code.upper()
        report.role_renamed = True

    new_permission_ids = [
        permission_id
        for (permission_id,) in db.query(RolePermissionXref.permission_id).filter(
            RolePermissionXref.role == new_code
        )
    ]
    if new_permission_ids:
        report.xref_merged = (
            db.query(RolePermissionXref)
            .filter(
                RolePermissionXref.role == old_code,
                RolePermissionXref.permission_id.in_(new_permission_ids),
            )
            .delete(synchronize_session=False)
        )
    report.xref_updated = (
        db.query(RolePermissionXref)
        .filter(RolePermissionXref.role == old_code)
        .update({"role": new_code}, synchronize_session=False)
    )
    db.flush()

    report.old_xref_after = _count_xref(db, old_code)
    report.new_xref_after = _count_xref(db, new_code)
    report.new_lookup_exists = bool(lookup_type) and (
        _find_lookup(db, lookup_type.id, new_code) is not None
    )
    role = db.query(Role).filter(Role.name == new_code.upper()).first()
    if role:
        report.users_with_new_role = (
            db.query(func.count(User.id)).filter(User.role_id == role.id).scalar()
        )
    return report


def rename_role_code(
    db: Session,
    old_code: str,
    new_code: str,
    new_label: Optional[str] = None,
) -> RenameReport:
    """Rename ``old_code`` to ``new_code`` in one transaction.

    See :func:`apply_role_rename`; any failure rolls everything back.
    """
    try:
        report = apply_role_rename(db, old_code, new_code, new_label)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Renamed role %s -> %s: lookup=%s role=%s xref=%d merged=%d",
        report.old_code, report.new_code, report.lookup_renamed, report.role_renamed,
        report.xref_updated, report.xref_merged,
    )
    return report
