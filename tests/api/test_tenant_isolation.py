"""Tenant users only ever see their own gym."""

from gymdesk.models.support_ticket import SupportTicket


def create_trainer(client, headers, name, gym_id=None):
    url = "/api/trainers/" + (f"?gymId={gym_id}" if gym_id else "")
    response = client.post(url, headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()


def test_gym_id_query_cannot_cross_tenants(client, auth_headers, gyms):
    create_trainer(client, auth_headers["north_admin"], "Nora")
    create_trainer(client, auth_headers["south_admin"], "Sid")

    south_id = gyms["south"].id
    response = client.get(f"/api/trainers/?gymId={south_id}", headers=auth_headers["north_admin"])
    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == ["Nora"]


def test_other_gym_rows_are_not_found(client, auth_headers):
    trainer = create_trainer(client, auth_headers["south_admin"], "Sid")
    response = client.get(f"/api/trainers/{trainer['id']}", headers=auth_headers["north_admin"])
    assert response.status_code == 404


def test_superadmin_picks_gym(client, auth_headers, gyms):
    create_trainer(client, auth_headers["north_admin"], "Nora")
    create_trainer(client, auth_headers["south_admin"], "Sid")

    response = client.get(
        f"/api/trainers/?gymId={gyms['north'].id}", headers=auth_headers["superadmin"]
    )
    assert [t["name"] for t in response.json()] == ["Nora"]


def test_notes_reject_members_of_other_gyms(client, auth_headers, users):
    response = client.post(
        "/api/notes/", headers=auth_headers["north_trainer"],
        json={"member_id": users["south_client"].id, "content": "Knee injury"},
    )
    assert response.status_code == 404

    response = client.post(
        "/api/notes/", headers=auth_headers["north_trainer"],
        json={"member_id": users["north_client"].id, "content": "Knee injury", "is_pinned": True},
    )
    assert response.status_code == 201
    listed = client.get(
        f"/api/notes/?memberId={users['north_client'].id}", headers=auth_headers["north_admin"]
    )
    assert [n["content"] for n in listed.json()] == ["Knee injury"]


def test_attendance_flow(client, auth_headers, users):
    member_id = users["north_client"].id
    check_in = client.post(
        "/api/attendance/check-in", headers=auth_headers["north_trainer"],
        json={"user_id": member_id},
    )
    assert check_in.status_code == 201

    again = client.post(
        "/api/attendance/check-in", headers=auth_headers["north_trainer"],
        json={"user_id": member_id},
    )
    assert again.status_code == 409

    check_out = client.post(
        f"/api/attendance/check-out/{member_id}", headers=auth_headers["north_trainer"]
    )
    assert check_out.status_code == 200
    assert check_out.json()["check_out_time"] is not None

    mine = client.get("/api/attendance/me", headers=auth_headers["north_client"])
    assert len(mine.json()) == 1

    south = client.post(
        "/api/attendance/check-in", headers=auth_headers["south_admin"],
        json={"user_id": member_id},
    )
    assert south.status_code == 404


def test_notifications_stay_within_gym(client, auth_headers, users):
    sent = client.post(
        "/api/notifications/", headers=auth_headers["north_admin"],
        json={"user_id": users["north_client"].id, "title": "Hi", "message": "Welcome"},
    )
    assert sent.status_code == 201
    crossed = client.post(
        "/api/notifications/", headers=auth_headers["north_admin"],
        json={"user_id": users["south_client"].id, "title": "Hi", "message": "Welcome"},
    )
    assert crossed.status_code == 404

    count = client.get("/api/notifications/me/unread-count", headers=auth_headers["north_client"])
    assert count.json() == {"count": 1}
    read = client.post(
        f"/api/notifications/{sent.json()['id']}/read", headers=auth_headers["north_client"]
    )
    assert read.json()["is_read"] is True
    assert client.get(
        "/api/notifications/me/unread-count", headers=auth_headers["north_client"]
    ).json() == {"count": 0}


def test_clients_only_see_their_own_tickets(client, auth_headers, seeded_db, users):
    own = client.post(
        "/api/support/tickets/", headers=auth_headers["north_client"],
        json={"subject": "Locker", "description": "Broken lock", "category": "technical"},
    )
    assert own.status_code == 201

    seeded_db.add(SupportTicket(
        gym_id=users["north_admin"].gym_id, user_id=users["north_admin"].id,
        subject="Internal", description="Staff only",
    ))
    seeded_db.commit()

    mine = client.get("/api/support/tickets/", headers=auth_headers["north_client"])
    assert [t["subject"] for t in mine.json()] == ["Locker"]

    everything = client.get("/api/support/tickets/", headers=auth_headers["north_admin"])
    assert {t["subject"] for t in everything.json()} == {"Locker", "Internal"}

    resolved = client.patch(
        f"/api/support/tickets/{own.json()['id']}", headers=auth_headers["north_admin"],
        json={"status": "resolved"},
    )
    assert resolved.json()["resolved_at"] is not None

    bad = client.post(
        "/api/support/tickets/", headers=auth_headers["north_client"],
        json={"subject": "X", "description": "Y", "priority": "whenever"},
    )
    assert bad.status_code == 400

    other_gym = client.get("/api/support/tickets/", headers=auth_headers["south_client"])
    assert other_gym.json() == []
