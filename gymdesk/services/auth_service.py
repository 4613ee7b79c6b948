"""Auth service — login and user management."""

from datetime import datetime, timezone
from typing import Optional, Dict, Any

from sqlalchemy.orm import Session

from gymdesk.core.constants import LevelEnum, UserStatusEnum
from gymdesk.core.exceptions import (
    AuthenticationError, ResourceConflictError, ResourceNotFoundError, ValidationError,
)
from gymdesk.core.security import hash_password, verify_password, create_access_token
from gymdesk.models.gym import Gym
from gymdesk.models.role import Role
from gymdesk.models.user import User


class AuthService:
    """Handles authentication and user management."""

    @staticmethod
    def token_claims(user: User) -> Dict[str, Any]:
        """Claims carried in the access token: subject, role code and gym."""
        return {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.code if user.role else None,
            "gym_id": user.gym_id,
        }

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Dict[str, Any]:
        """Authenticate user and return a JWT access token.

        Raises:
            AuthenticationError: If credentials are invalid or the account is
                not active.
        """
        user = db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid email or password")

        if user.status == UserStatusEnum.suspended:
            raise AuthenticationError("Your account has been suspended")
        if user.status != UserStatusEnum.active:
            raise AuthenticationError("Your account is inactive")

        claims = AuthService.token_claims(user)
        access_token = create_access_token(claims)

        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "user": {
                "id": user.id,
                "email": user.email,
                "full_name": user.full_name,
                "role": claims["role"],
                "gym_id": user.gym_id,
            },
        }

    @staticmethod
    def create_user(
        db: Session,
        email: str,
        password: str,
        full_name: str,
        role_name: str,
        gym_id: Optional[int] = None,
    ) -> User:
        """Create a user. Gym-level roles must belong to a gym; system roles must not."""
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            raise ResourceConflictError(f"User with email {email} already exists")

        role = db.query(Role).filter(Role.name == role_name.upper()).first()
        if not role or role.is_archived:
            raise ResourceNotFoundError(f"Role '{role_name}' not found")

        if role.level == LevelEnum.gym and gym_id is None:
            raise ValidationError(f"Role '{role.code}' requires a gym")
        if role.level == LevelEnum.system and gym_id is not None:
            raise ValidationError(f"Role '{role.code}' cannot belong to a gym")
        if gym_id is not None and not db.query(Gym).filter(Gym.id == gym_id).first():
            raise ResourceNotFoundError(f"Gym {gym_id} not found")

        user = User(
            email=email,
            hashed_password=hash_password(password),
            full_name=full_name,
            role_id=role.id,
            gym_id=gym_id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        """Get a user by id."""
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ResourceNotFoundError(f"User {user_id} not found")
        return user

    @staticmethod
    def get_gym_user(db: Session, user_id: int, gym_id: int) -> User:
        """Get a user that belongs to ``gym_id``; users of other gyms are not found."""
        user = db.query(User).filter(User.id == user_id, User.gym_id == gym_id).first()
        if not user:
            raise ResourceNotFoundError(f"User {user_id} not found in gym {gym_id}")
        return user


auth_service = AuthService()
