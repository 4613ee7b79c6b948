"""Seed the platform superadmin account from settings."""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from gymdesk.core.config import settings
from gymdesk.core.constants import UserStatusEnum
from gymdesk.core.security import hash_password
from gymdesk.models.role import Role
from gymdesk.models.user import User

logger = logging.getLogger("gymdesk")


def seed_super_admin(db: Session) -> Tuple[Optional[User], bool]:
    """Ensure ``SUPER_ADMIN_EMAIL`` exists with the superadmin role and no gym.

    Returns ``(user, created)``. ``user`` is ``None`` when the superadmin role
    has not been seeded yet. An existing account keeps its password but is
    moved back to the superadmin role and reactivated.
    """
    role = db.query(Role).filter(Role.name == settings.SUPER_ADMIN_ROLE.upper()).first()
    if role is None:
        logger.warning("Role %s missing; run seed_defaults first", settings.SUPER_ADMIN_ROLE)
        return None, False

    user = db.query(User).filter(User.email == settings.SUPER_ADMIN_EMAIL).first()
    if user is not None:
        user.role_id = role.id
        user.gym_id = None
        user.status = UserStatusEnum.active
        db.commit()
        return user, False

    user = User(
        email=settings.SUPER_ADMIN_EMAIL,
        hashed_password=hash_password(settings.SUPER_ADMIN_PASSWORD),
        full_name="Platform Admin",
        role_id=role.id,
        gym_id=None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created superadmin %s", user.email)
    return user, True
