"""Seed lookups, roles, permissions and role grants.

Safe to run repeatedly: existing rows are updated in place and missing rows
are created, so a second run creates nothing.
"""

import logging
from typing import Dict, Tuple

from sqlalchemy.orm import Session

from gymdesk.core.constants import LevelEnum
from gymdesk.models.lookup import Lookup, LookupType
from gymdesk.models.permission import Permission, RolePermissionXref
from gymdesk.models.role import Role

logger = logging.getLogger("gymdesk")

LOOKUP_TYPES = [
    ("USER_ROLE", "User Role", "Roles for user access control"),
    ("USER_STATUS", "User Status", "Account status of users"),
    ("GENDER", "Gender", "Gender options for user profile"),
    ("TICKET_STATUS", "Ticket Status", "Support ticket status options"),
    ("TICKET_CATEGORY", "Ticket Category", "Support ticket category options"),
    ("TICKET_PRIORITY", "Ticket Priority", "Support ticket priority options"),
]

LOOKUP_VALUES = {
    "USER_ROLE": [
        ("superadmin", "Super Admin"),
        ("admin", "Admin"),
        ("branch_admin", "Branch Admin"),
        ("manager", "Manager"),
        ("trainer", "Trainer"),
        ("client", "Client"),
    ],
    "USER_STATUS": [
        ("active", "Active"),
        ("inactive", "Inactive"),
        ("suspended", "Suspended"),
    ],
    "GENDER": [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
    ],
    "TICKET_STATUS": [
        ("open", "Open"),
        ("in_progress", "In Progress"),
        ("waiting_for_response", "Waiting for Response"),
        ("resolved", "Resolved"),
        ("closed", "Closed"),
    ],
    "TICKET_CATEGORY": [
        ("general", "General"),
        ("technical", "Technical"),
        ("billing", "Billing"),
        ("feedback", "Feedback"),
        ("complaint", "Complaint"),
    ],
    "TICKET_PRIORITY": [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("urgent", "Urgent"),
    ],
}

ROLES = [
    # name, label, level, sort_order
    ("SUPERADMIN", "Super Admin", LevelEnum.system, 1),
    ("ADMIN", "Gym Admin", LevelEnum.gym, 2),
    ("BRANCH_ADMIN", "Branch Admin", LevelEnum.gym, 3),
    ("MANAGER", "Manager", LevelEnum.gym, 4),
    ("TRAINER", "Trainer", LevelEnum.gym, 5),
    ("CLIENT", "Client", LevelEnum.gym, 6),
]

SYSTEM = LevelEnum.system
GYM = LevelEnum.gym

PERMISSIONS = [
    # code, name, module, level
    ("dashboard.view", "View Dashboard", "dashboard", GYM),
    ("users.view", "View Users", "users", SYSTEM),
    ("users.manage", "Manage Users", "users", SYSTEM),
    ("members.view", "View Members", "members", GYM),
    ("members.manage", "Manage Members", "members", GYM),
    ("managers.view", "View Managers", "managers", GYM),
    ("managers.manage", "Manage Managers", "managers", GYM),
    ("trainers.view", "View Trainers", "trainers", GYM),
    ("trainers.manage", "Manage Trainers", "trainers", GYM),
    ("requests.view", "View Requests", "requests", GYM),
    ("requests.manage", "Manage Requests", "requests", GYM),
    ("clients.view", "View Clients", "clients", GYM),
    ("attendance.view", "View Attendance", "attendance", GYM),
    ("attendance.manage", "Manage Attendance", "attendance", GYM),
    ("subscription.view", "View Subscription", "subscription", GYM),
    ("subscription.manage", "Manage Subscriptions", "subscription", GYM),
    ("gym.view", "View Gym", "gym", SYSTEM),
    ("gym.manage", "Manage Gym", "gym", SYSTEM),
    ("view_gym_profile", "View Gym Profile", "gym_profile", GYM),
    ("manage_gym_profile", "Manage Gym Profile", "gym_profile", GYM),
    ("contact_requests.view", "View Contact Requests", "contact_requests", SYSTEM),
    ("contact_requests.manage", "Manage Contact Requests", "contact_requests", SYSTEM),
    ("saas_subscriptions.view", "View SaaS Subscriptions", "saas_subscriptions", SYSTEM),
    ("saas_subscriptions.manage", "Manage SaaS Subscriptions", "saas_subscriptions", SYSTEM),
    ("health.view", "View Health & Fitness", "health", GYM),
    ("support.view", "View Support", "support", GYM),
    ("support.manage", "Manage Support", "support", GYM),
    ("settings.view", "View Settings", "settings", GYM),
    ("settings.manage", "Manage Settings", "settings", GYM),
    ("reports.view", "View Reports", "reports", GYM),
    ("analytics.view", "View Analytics", "analytics", GYM),
    ("profile.view", "View Profile", "profile", GYM),
    ("notifications.manage", "Manage Notifications", "notifications", GYM),
    ("notes.manage", "Manage Member Notes", "notes", GYM),
    ("lookups.read", "Read Lookups", "lookups", GYM),
    ("lookups.manage", "Manage Lookups", "lookups", SYSTEM),
    ("permissions.manage", "Manage Permissions", "permissions", SYSTEM),
    ("salary.view", "View Salary", "salary", GYM),
    ("salary.manage", "Manage Salary", "salary", GYM),
    ("programs.manage", "Manage Programs", "programs", GYM),
]

_GYM_STAFF_COMMON = [
    "dashboard.view", "members.view", "members.manage",
    "trainers.view", "trainers.manage", "requests.view", "requests.manage",
    "reports.view", "analytics.view", "subscription.manage", "attendance.manage",
    "settings.view", "profile.view", "notifications.manage", "notes.manage",
    "lookups.read", "programs.manage",
]

ROLE_PERMISSIONS: Dict[str, list] = {
    "superadmin": [
        "dashboard.view", "gym.view", "gym.manage", "users.view", "users.manage",
        "contact_requests.view", "contact_requests.manage",
        "saas_subscriptions.view", "saas_subscriptions.manage",
        "settings.view", "settings.manage", "profile.view",
        "support.view", "support.manage", "reports.view",
        "lookups.read", "lookups.manage", "permissions.manage",
    ],
    "admin": _GYM_STAFF_COMMON + [
        "view_gym_profile", "manage_gym_profile", "managers.view", "managers.manage",
        "settings.manage", "support.view", "salary.view", "salary.manage",
    ],
    "branch_admin": _GYM_STAFF_COMMON + [
        "view_gym_profile", "support.view", "salary.view", "salary.manage",
    ],
    "manager": _GYM_STAFF_COMMON + ["settings.manage"],
    "trainer": [
        "dashboard.view", "clients.view", "reports.view", "attendance.manage",
        "settings.view", "profile.view", "notes.manage", "lookups.read",
    ],
    "client": [
        "dashboard.view", "subscription.view", "attendance.view", "health.view",
        "profile.view", "settings.view", "support.view", "lookups.read",
    ],
}


def _seed_lookups(db: Session) -> Dict[str, int]:
    created = {"lookup_types": 0, "lookups": 0}
    for code, name, description in LOOKUP_TYPES:
        lookup_type = db.query(LookupType).filter(LookupType.code == code).first()
        if lookup_type is None:
            lookup_type = LookupType(code=code, name=name, description=description)
            db.add(lookup_type)
            db.flush()
            created["lookup_types"] += 1
        else:
            lookup_type.name = name
            lookup_type.description = description

        for order, (value_code, value_name) in enumerate(LOOKUP_VALUES.get(code, []), start=1):
            lookup = db.query(Lookup).filter(
                Lookup.lookup_type_id == lookup_type.id,
                Lookup.code == value_code,
            ).first()
            if lookup is None:
                db.add(Lookup(
                    lookup_type_id=lookup_type.id,
                    code=value_code,
                    name=value_name,
                    value=value_code,
                    display_order=order,
                ))
                created["lookups"] += 1
            else:
                lookup.name = value_name
                lookup.display_order = order
    return created


def _seed_roles(db: Session) -> int:
    created = 0
    for name, label, level, sort_order in ROLES:
        role = db.query(Role).filter(Role.name == name).first()
        if role is None:
            db.add(Role(
                name=name, label=label, level=level,
                sort_order=sort_order, is_system=True,
            ))
            created += 1
        else:
            role.label = label
            role.level = level
            role.sort_order = sort_order
            role.is_system = True
    return created


def _seed_permissions(db: Session) -> Tuple[Dict[str, Permission], int]:
    by_code = {}
    created = 0
    for code, name, module, level in PERMISSIONS:
        permission = db.query(Permission).filter(Permission.code == code).first()
        if permission is None:
            permission = Permission(code=code, name=name, module=module, level=level)
            db.add(permission)
            db.flush()
            created += 1
        else:
            permission.name = name
            permission.module = module
            permission.level = level
        by_code[code] = permission
    return by_code, created


def _seed_grants(db: Session, permissions: Dict[str, Permission]) -> int:
    created = 0
    for role, codes in ROLE_PERMISSIONS.items():
        existing = {
            row.permission_id
            for row in db.query(RolePermissionXref).filter(RolePermissionXref.role == role)
        }
        for code in codes:
            permission = permissions[code]
            if permission.id in existing:
                continue
            db.add(RolePermissionXref(role=role, permission_id=permission.id))
            existing.add(permission.id)
            created += 1
    return created


def seed_defaults(db: Session) -> Dict[str, int]:
    """Upsert the canonical vocabulary and return counts of created rows."""
    try:
        created = _seed_lookups(db)
        created["roles"] = _seed_roles(db)
        permissions, created["permissions"] = _seed_permissions(db)
        created["role_permissions"] = _seed_grants(db, permissions)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Seeded defaults: %s", created)
    return created
