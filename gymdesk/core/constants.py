"""Controlled vocabulary shared across the platform."""

import enum


class Roles:
    """User role codes as carried in tokens and the USER_ROLE lookup."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    BRANCH_ADMIN = "branch_admin"
    MANAGER = "manager"
    TRAINER = "trainer"
    CLIENT = "client"


ALL_ROLES = (
    Roles.SUPERADMIN,
    Roles.ADMIN,
    Roles.BRANCH_ADMIN,
    Roles.MANAGER,
    Roles.TRAINER,
    Roles.CLIENT,
)
ADMIN_ROLES = (Roles.ADMIN, Roles.BRANCH_ADMIN)
STAFF_ROLES = (Roles.ADMIN, Roles.BRANCH_ADMIN, Roles.MANAGER, Roles.TRAINER)
GYM_ROLES = (Roles.ADMIN, Roles.BRANCH_ADMIN, Roles.MANAGER, Roles.TRAINER, Roles.CLIENT)

USER_ROLE_LOOKUP_TYPE = "USER_ROLE"


class LevelEnum(str, enum.Enum):
    """Whether a role or permission spans the platform or a single gym."""
    system = "system"
    gym = "gym"


class UserStatusEnum(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    suspended = "suspended"
