"""Superadmin account seeding."""

from gymdesk.core.config import settings
from gymdesk.core.constants import UserStatusEnum
from gymdesk.core.security import verify_password
from gymdesk.db.seeds.seed_super_admin import seed_super_admin
from gymdesk.models.user import User


def test_requires_seeded_roles(db):
    assert seed_super_admin(db) == (None, False)
    assert db.query(User).count() == 0


def test_creates_account_once(seeded_db):
    user, created = seed_super_admin(seeded_db)
    assert created
    assert user.email == settings.SUPER_ADMIN_EMAIL
    assert user.gym_id is None
    assert user.role.code == "superadmin"
    assert verify_password(settings.SUPER_ADMIN_PASSWORD, user.hashed_password)

    again, created = seed_super_admin(seeded_db)
    assert not created
    assert again.id == user.id


def test_existing_account_is_restored(seeded_db):
    user, _ = seed_super_admin(seeded_db)
    user.status = UserStatusEnum.suspended
    seeded_db.commit()

    restored, created = seed_super_admin(seeded_db)
    assert not created
    assert restored.status == UserStatusEnum.active
