"""Shared fixtures: in-memory SQLite database, seeded vocabulary, tokens."""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import gymdesk.models  # noqa: F401
from gymdesk.core.security import create_access_token, hash_password
from gymdesk.db.base import Base
from gymdesk.db.seeds.seed_defaults import seed_defaults
from gymdesk.db.session import get_db
from gymdesk.main import app
from gymdesk.models.gym import Gym
from gymdesk.models.role import Role
from gymdesk.models.user import User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db) -> Session:
    """Database with lookups, roles, permissions and grants."""
    seed_defaults(db)
    return db


@pytest.fixture
def client(session_factory, seeded_db) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def gyms(seeded_db) -> Dict[str, Gym]:
    north = Gym(name="North Gym", slug="north")
    south = Gym(name="South Gym", slug="south")
    seeded_db.add_all([north, south])
    seeded_db.commit()
    return {"north": north, "south": south}


@pytest.fixture
def make_user(seeded_db) -> Callable[..., User]:
    def _make(email: str, role: str, gym: Optional[Gym] = None, password: str = "password123") -> User:
        role_row = seeded_db.query(Role).filter(Role.name == role.upper()).one()
        user = User(
            email=email,
            hashed_password=hash_password(password),
            full_name=email.split("@")[0].title(),
            role_id=role_row.id,
            gym_id=gym.id if gym else None,
        )
        seeded_db.add(user)
        seeded_db.commit()
        seeded_db.refresh(user)
        return user

    return _make


@pytest.fixture
def users(gyms, make_user) -> Dict[str, User]:
    return {
        "superadmin": make_user("root@gymdesk.test", "superadmin"),
        "north_admin": make_user("admin@north.test", "admin", gyms["north"]),
        "north_trainer": make_user("coach@north.test", "trainer", gyms["north"]),
        "north_client": make_user("client@north.test", "client", gyms["north"]),
        "south_admin": make_user("admin@south.test", "admin", gyms["south"]),
        "south_client": make_user("client@south.test", "client", gyms["south"]),
    }


def bearer(user: User) -> Dict[str, str]:
    """Authorization header carrying a fresh access token for ``user``."""
    token = create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.code,
        "gym_id": user.gym_id,
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(users) -> Dict[str, Dict[str, str]]:
    return {name: bearer(user) for name, user in users.items()}


@pytest.fixture
def token_for() -> Callable[[User], Dict[str, str]]:
    return bearer
