"""Default vocabulary seeding."""

from gymdesk.db.seeds.seed_defaults import PERMISSIONS, ROLE_PERMISSIONS, ROLES, seed_defaults
from gymdesk.models.lookup import Lookup, LookupType
from gymdesk.models.permission import Permission, RolePermissionXref
from gymdesk.models.role import Role
from gymdesk.services.lookup_service import lookup_service


def test_first_run_creates_everything(db):
    created = seed_defaults(db)
    assert created["roles"] == len(ROLES)
    assert created["permissions"] == len(PERMISSIONS)
    assert created["role_permissions"] == sum(len(set(c)) for c in ROLE_PERMISSIONS.values())
    assert created["lookup_types"] == db.query(LookupType).count()
    assert created["lookups"] == db.query(Lookup).count()


def test_second_run_creates_nothing(db):
    seed_defaults(db)
    before = (
        db.query(Role).count(),
        db.query(Permission).count(),
        db.query(RolePermissionXref).count(),
        db.query(Lookup).count(),
    )
    created = seed_defaults(db)
    assert set(created.values()) == {0}
    after = (
        db.query(Role).count(),
        db.query(Permission).count(),
        db.query(RolePermissionXref).count(),
        db.query(Lookup).count(),
    )
    assert before == after


def test_role_lookup_matches_role_codes(seeded_db):
    codes = [lookup.code for lookup in lookup_service.list_values(seeded_db, "USER_ROLE")]
    assert codes == [role.code for role in seeded_db.query(Role).order_by(Role.sort_order)]


def test_system_permissions_only_granted_to_system_roles(seeded_db):
    system_codes = {code for code, _, _, level in PERMISSIONS if level.value == "system"}
    for role, codes in ROLE_PERMISSIONS.items():
        if role != "superadmin":
            assert not system_codes & set(codes), role
