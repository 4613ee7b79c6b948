"""Gym-context resolution: token gym wins, superadmins name one explicitly."""

import pytest

from gymdesk.core.exceptions import AuthorizationError, ValidationError
from gymdesk.core.gym_context import parse_gym_id, resolve_gym_id, resolve_optional_gym_id


@pytest.mark.parametrize("value,expected", [
    ("42", 42),
    (" 42", 42),
    ("42abc", 42),
    ("-3", -3),
    ("abc", None),
    ("", None),
    (None, None),
])
def test_parse_gym_id_takes_leading_integer(value, expected):
    assert parse_gym_id(value) == expected


@pytest.mark.parametrize("query", [None, "", "7", "abc"])
@pytest.mark.parametrize("is_super_admin", [True, False])
def test_token_gym_always_wins(query, is_super_admin):
    assert resolve_gym_id(3, query, is_super_admin) == 3
    assert resolve_optional_gym_id(3, query) == 3


def test_super_admin_uses_query_gym():
    assert resolve_gym_id(None, "12", is_super_admin=True) == 12


def test_super_admin_with_malformed_gym_id_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        resolve_gym_id(None, "abc", is_super_admin=True)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid gymId parameter"


def test_super_admin_without_gym_id_is_forbidden():
    with pytest.raises(AuthorizationError) as exc_info:
        resolve_gym_id(None, None, is_super_admin=True)
    assert exc_info.value.status_code == 403
    assert "Superadmins must provide gymId" in exc_info.value.message


def test_non_admin_without_gym_cannot_use_query():
    with pytest.raises(AuthorizationError):
        resolve_gym_id(None, "5", is_super_admin=False)


def test_optional_resolution_never_raises():
    assert resolve_optional_gym_id(None, None) is None
    assert resolve_optional_gym_id(None, "abc") is None
    assert resolve_optional_gym_id(None, "9") == 9
