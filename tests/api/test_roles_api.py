"""Role, permission and lookup administration endpoints."""


def test_any_authenticated_caller_lists_roles(client, auth_headers):
    response = client.get("/api/roles/", headers=auth_headers["north_client"])
    assert response.status_code == 200
    assert [r["code"] for r in response.json()][:2] == ["superadmin", "admin"]


def test_superadmin_manages_role_grants(client, auth_headers):
    headers = auth_headers["superadmin"]
    created = client.post(
        "/api/roles/", headers=headers,
        json={"name": "front_desk", "label": "Front Desk", "level": "gym"},
    )
    assert created.status_code == 201
    role_id = created.json()["id"]

    permission = client.get("/api/permissions/members.view", headers=headers).json()
    granted = client.post(f"/api/roles/{role_id}/permissions/{permission['id']}", headers=headers)
    assert granted.status_code == 200

    listed = client.get(f"/api/roles/{role_id}/permissions", headers=headers)
    assert [p["code"] for p in listed.json()] == ["members.view"]

    duplicate = client.post(
        "/api/roles/", headers=headers,
        json={"name": "FRONT_DESK", "label": "Another", "level": "gym"},
    )
    assert duplicate.status_code == 409


def test_system_role_cannot_be_deleted(client, auth_headers):
    headers = auth_headers["superadmin"]
    roles = client.get("/api/roles/", headers=headers).json()
    client_role = next(r for r in roles if r["code"] == "client")
    assert client.delete(f"/api/roles/{client_role['id']}", headers=headers).status_code == 403


def test_my_permissions(client, auth_headers):
    response = client.get("/api/permissions/me", headers=auth_headers["north_client"])
    assert "support.view" in response.json()


def test_replace_role_permissions(client, auth_headers):
    response = client.put(
        "/api/permissions/roles/trainer", headers=auth_headers["superadmin"],
        json={"permission_codes": ["clients.view", "notes.manage"]},
    )
    assert response.status_code == 200
    assert [p["code"] for p in response.json()] == ["clients.view", "notes.manage"]


def test_replace_role_permissions_enforces_level_and_role(client, auth_headers):
    system_grant = client.put(
        "/api/permissions/roles/client", headers=auth_headers["superadmin"],
        json={"permission_codes": ["gym.manage"]},
    )
    assert system_grant.status_code == 400

    unknown = client.put(
        "/api/permissions/roles/ghost", headers=auth_headers["superadmin"],
        json={"permission_codes": ["dashboard.view"]},
    )
    assert unknown.status_code == 404


def test_seed_endpoint_is_idempotent(client, auth_headers):
    response = client.post("/api/roles/seed", headers=auth_headers["superadmin"])
    assert response.status_code == 200
    assert set(response.json()["created"].values()) == {0}


def test_lookups(client, auth_headers):
    values = client.get("/api/lookups/TICKET_PRIORITY", headers=auth_headers["north_client"])
    assert [v["code"] for v in values.json()] == ["low", "medium", "high", "urgent"]

    denied = client.post(
        "/api/lookups/TICKET_PRIORITY", headers=auth_headers["north_admin"],
        json={"code": "critical", "name": "Critical"},
    )
    assert denied.status_code == 403

    created = client.post(
        "/api/lookups/TICKET_PRIORITY", headers=auth_headers["superadmin"],
        json={"code": "critical", "name": "Critical", "display_order": 5},
    )
    assert created.status_code == 201


def test_gym_admin_creates_users_in_own_gym(client, auth_headers, gyms):
    response = client.post(
        f"/api/admin/users?gymId={gyms['south'].id}", headers=auth_headers["north_admin"],
        json={"email": "new@north.test", "password": "password123",
              "full_name": "New Member", "role": "client"},
    )
    assert response.status_code == 201
    assert response.json()["gym_id"] == gyms["north"].id

    escalate = client.post(
        "/api/admin/users", headers=auth_headers["north_admin"],
        json={"email": "evil@north.test", "password": "password123",
              "full_name": "Evil", "role": "superadmin"},
    )
    assert escalate.status_code == 403


def test_superadmin_registers_gyms(client, auth_headers, gyms):
    headers = auth_headers["superadmin"]
    created = client.post("/api/admin/gyms", headers=headers, json={"name": "East Gym", "slug": "east"})
    assert created.status_code == 201
    duplicate = client.post("/api/admin/gyms", headers=headers, json={"name": "East 2", "slug": "east"})
    assert duplicate.status_code == 409
    names = [g["name"] for g in client.get("/api/admin/gyms", headers=headers).json()]
    assert names == ["East Gym", "North Gym", "South Gym"]
    assert client.get("/api/admin/gyms", headers=auth_headers["north_admin"]).status_code == 403
