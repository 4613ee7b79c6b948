"""Access guard chain: authentication, role check, gym scope binding.

Every protected route declares an :class:`AccessGuard` holding its role
allow-list and scope mode. The guard runs as a FastAPI dependency in a fixed
order:

1. ``get_caller`` authenticates the bearer token. FastAPI resolves it before
   the guard body runs, so an unauthenticated request never reaches stage 2.
2. :func:`check_role` compares the caller's role with the allow-list.
3. :func:`bind_gym_scope` resolves the gym the request operates on.

Stages 2 and 3 are plain predicates returning a :class:`GuardResult`;
:func:`run_guard_chain` raises the first failure.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from gymdesk.core.config import settings
from gymdesk.core.constants import Roles
from gymdesk.core.exceptions import AuthenticationError, AuthorizationError, GymDeskError
from gymdesk.core.gym_context import resolve_gym_id, resolve_optional_gym_id
from gymdesk.core.security import decode_token

logger = logging.getLogger("gymdesk")

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)


class ScopeMode(str, enum.Enum):
    """How a route binds the gym it operates on."""
    required = "required"
    optional = "optional"
    none = "none"


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller, built once from the verified token."""

    user_id: int
    gym_id: Optional[int]
    role: str
    email: Optional[str] = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == settings.SUPER_ADMIN_ROLE


@dataclass(frozen=True)
class GymContext:
    """Caller plus the gym scope resolved for this request.

    ``gym_id`` is ``None`` only on optional-scope routes when no gym could be
    determined, meaning the handler operates platform-wide.
    """

    caller: CallerIdentity
    gym_id: Optional[int] = None

    @property
    def user_id(self) -> int:
        return self.caller.user_id

    @property
    def role(self) -> str:
        return self.caller.role


@dataclass(frozen=True)
class GuardResult:
    ok: bool
    error: Optional[GymDeskError] = None
    gym_id: Optional[int] = None

    @classmethod
    def success(cls, gym_id: Optional[int] = None) -> "GuardResult":
        return cls(ok=True, gym_id=gym_id)

    @classmethod
    def failure(cls, error: GymDeskError) -> "GuardResult":
        return cls(ok=False, error=error)


def authenticate(credentials: Optional[HTTPAuthorizationCredentials]) -> CallerIdentity:
    """Verify the bearer credential and build the caller identity.

    Raises:
        AuthenticationError: Missing, invalid or expired token, or a payload
            without a usable subject.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    payload = decode_token(credentials.credentials)
    if payload.get("type", "access") != "access":
        raise AuthenticationError("Invalid token type")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")
    gym_id = payload.get("gym_id")
    return CallerIdentity(
        user_id=user_id,
        gym_id=int(gym_id) if gym_id is not None else None,
        role=payload.get("role") or "",
        email=payload.get("email"),
    )


async def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> CallerIdentity:
    """FastAPI dependency for stage 1 (authentication)."""
    return authenticate(credentials)


def check_role(caller: CallerIdentity, allowed_roles: Iterable[str]) -> GuardResult:
    """Permit the caller when the allow-list is empty or contains its role."""
    allowed = frozenset(allowed_roles)
    if not allowed or caller.role in allowed:
        return GuardResult.success()
    return GuardResult.failure(
        AuthorizationError(
            f"Access denied. Required roles: {', '.join(sorted(allowed))}. "
            f"Your role: {caller.role or 'none'}"
        )
    )


def bind_gym_scope(
    caller: CallerIdentity,
    query_gym_id: Optional[str],
    scope: ScopeMode,
) -> GuardResult:
    """Resolve the gym for the request according to the route's scope mode."""
    if scope == ScopeMode.none:
        return GuardResult.success()
    if scope == ScopeMode.optional:
        return GuardResult.success(resolve_optional_gym_id(caller.gym_id, query_gym_id))
    try:
        gym_id = resolve_gym_id(caller.gym_id, query_gym_id, caller.is_super_admin)
    except GymDeskError as exc:
        return GuardResult.failure(exc)
    return GuardResult.success(gym_id)


def run_guard_chain(
    caller: CallerIdentity,
    allowed_roles: Iterable[str],
    scope: ScopeMode,
    query_gym_id: Optional[str] = None,
) -> GymContext:
    """Run the role check then scope binding, raising the first failure."""
    result = check_role(caller, allowed_roles)
    if not result.ok:
        logger.info("Role check denied user %s (%s)", caller.user_id, caller.role)
        raise result.error

    result = bind_gym_scope(caller, query_gym_id, scope)
    if not result.ok:
        logger.info("Gym scope denied user %s: %s", caller.user_id, result.error.message)
        raise result.error

    return GymContext(caller=caller, gym_id=result.gym_id)


class AccessGuard:
    """Per-route guard declaration: role allow-list plus gym scope mode.

    Usage::

        staff = AccessGuard(Roles.ADMIN, Roles.MANAGER, scope=ScopeMode.required)

        @router.get("/")
        async def handler(ctx: GymContext = Depends(staff)): ...
    """

    def __init__(self, *roles: str, scope: ScopeMode = ScopeMode.none):
        self.allowed_roles = frozenset(roles)
        self.scope = ScopeMode(scope)

    async def __call__(
        self,
        caller: CallerIdentity = Depends(get_caller),
        gym_id: Optional[str] = Query(None, alias="gymId"),
    ) -> GymContext:
        return run_guard_chain(caller, self.allowed_roles, self.scope, gym_id)

    def __repr__(self) -> str:
        roles = ",".join(sorted(self.allowed_roles)) or "*"
        return f"AccessGuard(roles={roles}, scope={self.scope.value})"


# Convenience guard declarations
require_authenticated = AccessGuard()
require_super_admin = AccessGuard(Roles.SUPERADMIN)
