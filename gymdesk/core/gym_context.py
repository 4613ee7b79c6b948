"""Resolve the gym a request is allowed to operate on.

Regular users always carry their gym in the token and can never act outside
it. Platform superadmins carry no gym and must name one explicitly through
the ``gymId`` query parameter.
"""

import re
from typing import Optional

from gymdesk.core.exceptions import AuthorizationError, ValidationError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_gym_id(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``value``; ``None`` when there is none."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def resolve_gym_id(
    token_gym_id: Optional[int],
    query_gym_id: Optional[str] = None,
    is_super_admin: bool = False,
) -> int:
    """Return the gym the caller operates on.

    The token's gym always wins over the query parameter, so a tenant user
    cannot reach another gym by passing ``gymId``.

    Raises:
        ValidationError: A superadmin passed a non-numeric ``gymId``.
        AuthorizationError: No gym can be determined for the caller.
    """
    if token_gym_id is not None:
        return token_gym_id

    if is_super_admin and query_gym_id:
        parsed = parse_gym_id(query_gym_id)
        if parsed is None:
            raise ValidationError("Invalid gymId parameter")
        return parsed

    raise AuthorizationError(
        "This operation requires a gym context. "
        "Superadmins must provide gymId query parameter."
    )


def resolve_optional_gym_id(
    token_gym_id: Optional[int],
    query_gym_id: Optional[str] = None,
) -> Optional[int]:
    """Like :func:`resolve_gym_id` but returns ``None`` instead of raising.

    A malformed ``gymId`` is ignored rather than rejected.
    """
    if token_gym_id is not None:
        return token_gym_id
    return parse_gym_id(query_gym_id)
