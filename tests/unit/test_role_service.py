"""Role definitions and permission grants."""

import pytest

from gymdesk.core.constants import USER_ROLE_LOOKUP_TYPE, LevelEnum
from gymdesk.core.exceptions import (
    AuthorizationError, ResourceConflictError, ResourceNotFoundError, ValidationError,
)
from gymdesk.models.permission import RolePermissionXref
from gymdesk.schemas.schemas import (
    LookupCreate, PermissionCreate, RoleCreate, RoleOut, RoleUpdate,
)
from gymdesk.services.lookup_service import lookup_service
from gymdesk.services.permission_service import permission_service
from gymdesk.services.role_service import role_service


@pytest.fixture
def custom_role(seeded_db):
    return role_service.create(
        seeded_db,
        RoleCreate(name="front_desk", label="Front Desk", level=LevelEnum.gym, sort_order=7),
    )


def test_create_normalizes_name(custom_role):
    assert custom_role.name == "FRONT_DESK"
    assert custom_role.code == "front_desk"


def test_duplicate_name_or_label_conflicts(seeded_db, custom_role):
    with pytest.raises(ResourceConflictError):
        role_service.create(
            seeded_db, RoleCreate(name="FRONT_DESK", label="Other", level=LevelEnum.gym)
        )
    with pytest.raises(ResourceConflictError):
        role_service.create(
            seeded_db, RoleCreate(name="reception", label="Front Desk", level=LevelEnum.gym)
        )


def test_list_roles_sorted_and_hides_archived(seeded_db, custom_role):
    role_service.archive(seeded_db, custom_role.id)
    names = [r.name for r in role_service.list_roles(seeded_db)]
    assert names == ["SUPERADMIN", "ADMIN", "BRANCH_ADMIN", "MANAGER", "TRAINER", "CLIENT"]
    assert "FRONT_DESK" in [r.name for r in role_service.list_roles(seeded_db, include_archived=True)]


def test_missing_role_not_found(seeded_db):
    with pytest.raises(ResourceNotFoundError):
        role_service.get(seeded_db, 9999)
    with pytest.raises(ResourceNotFoundError):
        role_service.get_by_name(seeded_db, "nobody")


def test_system_roles_are_protected(seeded_db):
    client = role_service.get_by_name(seeded_db, "CLIENT")
    with pytest.raises(AuthorizationError):
        role_service.update(seeded_db, client.id, RoleUpdate(name="MEMBER"))
    with pytest.raises(AuthorizationError):
        role_service.archive(seeded_db, client.id)
    with pytest.raises(AuthorizationError):
        role_service.delete(seeded_db, client.id)


def test_system_role_label_can_change(seeded_db):
    client = role_service.get_by_name(seeded_db, "CLIENT")
    updated = role_service.update(seeded_db, client.id, RoleUpdate(label="Gym Member"))
    assert updated.label == "Gym Member"
    assert updated.name == "CLIENT"


def test_rename_moves_grants(seeded_db, custom_role):
    permission = permission_service.get_by_code(seeded_db, "attendance.manage")
    role_service.assign_permission(seeded_db, custom_role.id, permission.id)

    role_service.update(seeded_db, custom_role.id, RoleUpdate(name="reception"))

    assert permission_service.get_permission_codes_by_role(seeded_db, "reception") == [
        "attendance.manage"
    ]
    assert permission_service.get_permission_codes_by_role(seeded_db, "front_desk") == []


def test_assign_is_idempotent(seeded_db, custom_role):
    permission = permission_service.get_by_code(seeded_db, "members.view")
    first = role_service.assign_permission(seeded_db, custom_role.id, permission.id)
    second = role_service.assign_permission(seeded_db, custom_role.id, permission.id)
    assert first.id == second.id
    count = seeded_db.query(RolePermissionXref).filter(
        RolePermissionXref.role == "front_desk"
    ).count()
    assert count == 1


def test_system_permission_rejected_for_gym_role(seeded_db, custom_role):
    permission = permission_service.get_by_code(seeded_db, "gym.manage")
    with pytest.raises(ValidationError):
        role_service.assign_permission(seeded_db, custom_role.id, permission.id)


def test_remove_permission_reports_whether_granted(seeded_db, custom_role):
    permission = permission_service.get_by_code(seeded_db, "members.view")
    role_service.assign_permission(seeded_db, custom_role.id, permission.id)
    assert role_service.remove_permission(seeded_db, custom_role.id, permission.id) is True
    assert role_service.remove_permission(seeded_db, custom_role.id, permission.id) is False


def test_delete_custom_role_drops_grants(seeded_db, custom_role):
    permission = permission_service.get_by_code(seeded_db, "members.view")
    role_service.assign_permission(seeded_db, custom_role.id, permission.id)
    role_service.delete(seeded_db, custom_role.id)
    assert permission_service.get_permission_codes_by_role(seeded_db, "front_desk") == []


def test_set_role_permissions_replaces_and_skips_unknown(seeded_db):
    result = permission_service.set_role_permissions(
        seeded_db, "trainer", ["clients.view", "does.not.exist"]
    )
    assert [p.code for p in result] == ["clients.view"]
    assert permission_service.get_permission_codes_by_role(seeded_db, "trainer") == ["clients.view"]


def test_permission_crud(seeded_db):
    created = permission_service.create(
        seeded_db, PermissionCreate(code="classes.manage", name="Manage Classes", module="classes")
    )
    assert created.level == LevelEnum.gym
    with pytest.raises(ResourceConflictError):
        permission_service.create(
            seeded_db, PermissionCreate(code="classes.manage", name="Again", module="classes")
        )
    permission_service.delete(seeded_db, "classes.manage")
    assert "classes.manage" not in [
        p.code for p in permission_service.list_permissions(seeded_db, module="classes")
    ]


def test_user_permissions_follow_role(seeded_db, users):
    codes = permission_service.user_permission_codes(seeded_db, users["north_client"].id)
    assert "support.view" in codes
    assert not permission_service.user_has_permission(
        seeded_db, users["north_client"].id, "members.manage"
    )


def test_rename_custom_role_renames_its_user_role_lookup(seeded_db, custom_role):
    lookup_service.create_value(
        seeded_db, USER_ROLE_LOOKUP_TYPE, LookupCreate(code="front_desk", name="Front Desk")
    )

    renamed = role_service.update(seeded_db, custom_role.id, RoleUpdate(name="reception"))

    assert renamed.name == "RECEPTION"
    codes = [v.code for v in lookup_service.list_values(seeded_db, USER_ROLE_LOOKUP_TYPE)]
    assert "reception" in codes
    assert "front_desk" not in codes


def test_rename_merges_grants_already_on_new_code(seeded_db, custom_role):
    dashboard = permission_service.get_by_code(seeded_db, "dashboard.view")
    members = permission_service.get_by_code(seeded_db, "members.view")
    seeded_db.add(RolePermissionXref(role="reception", permission_id=dashboard.id))
    seeded_db.commit()
    role_service.assign_permission(seeded_db, custom_role.id, dashboard.id)
    role_service.assign_permission(seeded_db, custom_role.id, members.id)

    role_service.update(seeded_db, custom_role.id, RoleUpdate(name="reception"))

    assert sorted(permission_service.get_permission_codes_by_role(seeded_db, "reception")) == [
        "dashboard.view", "members.view",
    ]
    assert permission_service.get_permission_codes_by_role(seeded_db, "front_desk") == []


def test_set_role_permissions_rejects_system_permission_on_gym_role(seeded_db):
    before = permission_service.get_permission_codes_by_role(seeded_db, "client")
    with pytest.raises(ValidationError):
        permission_service.set_role_permissions(seeded_db, "client", ["support.view", "gym.manage"])
    assert permission_service.get_permission_codes_by_role(seeded_db, "client") == before


def test_set_role_permissions_allows_system_permission_on_system_role(seeded_db):
    result = permission_service.set_role_permissions(seeded_db, "superadmin", ["gym.manage"])
    assert [p.code for p in result] == ["gym.manage"]


def test_set_role_permissions_unknown_role_not_found(seeded_db):
    with pytest.raises(ResourceNotFoundError):
        permission_service.set_role_permissions(seeded_db, "ghost", ["dashboard.view"])
    assert permission_service.get_permission_codes_by_role(seeded_db, "ghost") == []


def test_role_out_reads_orm_rows(seeded_db):
    assert RoleOut.model_config["from_attributes"] is True
    out = RoleOut.model_validate(role_service.get_by_name(seeded_db, "TRAINER"))
    assert out.code == "trainer"
    assert out.level == LevelEnum.gym
