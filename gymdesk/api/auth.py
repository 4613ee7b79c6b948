"""Auth API router — login and current user."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from gymdesk.core.guards import CallerIdentity, get_caller
from gymdesk.db.session import get_db
from gymdesk.schemas.schemas import LoginRequest, TokenResponse, UserOut
from gymdesk.services.audit_service import audit_service
from gymdesk.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def user_out(user) -> UserOut:
    return UserOut(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        role=user.role.code if user.role else None,
        gym_id=user.gym_id,
        status=user.status.value,
        created_at=user.created_at,
    )


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Authenticate and return a JWT access token."""
    result = auth_service.authenticate(db, body.email, body.password)
    audit_service.log(
        db,
        actor_id=result["user"]["id"],
        actor_email=body.email,
        action="user.login",
        resource_type="user",
        resource_id=str(result["user"]["id"]),
        actor_role=result["user"]["role"],
        gym_id=result["user"]["gym_id"],
        request_id=getattr(request.state, "request_id", None),
        ip_address=request.client.host if request.client else None,
    )
    return result


@router.get("/me", response_model=UserOut)
async def get_me(
    db: Session = Depends(get_db),
    caller: CallerIdentity = Depends(get_caller),
):
    """Get current user profile."""
    return user_out(auth_service.get_user(db, caller.user_id))
