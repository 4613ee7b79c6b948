"""Role check and scope binding predicates."""

from types import SimpleNamespace

import pytest

from gymdesk.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from gymdesk.core.guards import (
    AccessGuard, CallerIdentity, ScopeMode, authenticate, bind_gym_scope, check_role,
    run_guard_chain,
)
from gymdesk.core.security import create_access_token

superadmin = CallerIdentity(user_id=1, gym_id=None, role="superadmin")
gym_admin = CallerIdentity(user_id=2, gym_id=10, role="admin")
client = CallerIdentity(user_id=3, gym_id=10, role="client")


def credentials(token):
    return SimpleNamespace(scheme="Bearer", credentials=token)


def test_authenticate_reads_token_claims():
    token = create_access_token({"sub": "7", "role": "trainer", "gym_id": 4, "email": "t@x.io"})
    caller = authenticate(credentials(token))
    assert caller == CallerIdentity(user_id=7, gym_id=4, role="trainer", email="t@x.io")
    assert not caller.is_super_admin


@pytest.mark.parametrize("creds", [
    None,
    credentials("not-a-jwt"),
    credentials(create_access_token({"role": "admin"})),
])
def test_authenticate_rejects_bad_credentials(creds):
    with pytest.raises(AuthenticationError):
        authenticate(creds)


def test_empty_allow_list_permits_everyone():
    assert check_role(client, []).ok
    assert check_role(superadmin, ()).ok


def test_role_outside_allow_list_is_denied():
    result = check_role(client, ["admin", "manager"])
    assert not result.ok
    assert isinstance(result.error, AuthorizationError)
    assert "Your role: client" in result.error.message


def test_scope_none_binds_no_gym():
    result = bind_gym_scope(gym_admin, "99", ScopeMode.none)
    assert result.ok and result.gym_id is None


def test_scope_required_ignores_query_for_tenant_users():
    result = bind_gym_scope(gym_admin, "99", ScopeMode.required)
    assert result.ok and result.gym_id == 10


def test_scope_required_failures_are_returned_not_raised():
    missing = bind_gym_scope(superadmin, None, ScopeMode.required)
    assert not missing.ok and isinstance(missing.error, AuthorizationError)

    malformed = bind_gym_scope(superadmin, "x", ScopeMode.required)
    assert not malformed.ok and isinstance(malformed.error, ValidationError)


def test_scope_optional_allows_platform_wide():
    assert bind_gym_scope(superadmin, None, ScopeMode.optional).gym_id is None
    assert bind_gym_scope(superadmin, "x", ScopeMode.optional).gym_id is None
    assert bind_gym_scope(superadmin, "5", ScopeMode.optional).gym_id == 5


def test_chain_checks_role_before_scope():
    # the role failure wins even though the scope would also fail
    caller = CallerIdentity(user_id=4, gym_id=None, role="trainer")
    with pytest.raises(AuthorizationError) as exc_info:
        run_guard_chain(caller, ["admin"], ScopeMode.required, "bad")
    assert "Required roles" in exc_info.value.message


def test_chain_returns_context():
    ctx = run_guard_chain(superadmin, ["superadmin"], ScopeMode.required, "8")
    assert ctx.gym_id == 8
    assert ctx.user_id == 1
    assert ctx.role == "superadmin"


def test_access_guard_repr():
    guard = AccessGuard("manager", "admin", scope=ScopeMode.optional)
    assert repr(guard) == "AccessGuard(roles=admin,manager, scope=optional)"
    assert repr(AccessGuard()) == "AccessGuard(roles=*, scope=none)"
