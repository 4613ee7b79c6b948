"""Login and the current-user endpoint."""

from gymdesk.models.user import User
from gymdesk.core.constants import UserStatusEnum


def test_login_returns_token_with_gym(client, users):
    response = client.post(
        "/api/auth/login", json={"email": "admin@north.test", "password": "password123"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "admin"
    assert body["user"]["gym_id"] == users["north_admin"].gym_id

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "admin@north.test"


def test_login_with_wrong_password(client, users):
    response = client.post(
        "/api/auth/login", json={"email": "admin@north.test", "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_suspended_user_cannot_login(client, seeded_db, users):
    user = seeded_db.get(User, users["north_client"].id)
    user.status = UserStatusEnum.suspended
    seeded_db.commit()

    response = client.post(
        "/api/auth/login", json={"email": "client@north.test", "password": "password123"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Your account has been suspended"


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
