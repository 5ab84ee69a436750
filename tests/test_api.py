"""
HTTP-level tests: identity header, error mapping and the main
partner-sharing flows through the REST routes.
"""

import pytest


def register(client, username):
    response = client.post("/api/users", json={
        "username": username,
        "email": f"{username}@example.com",
        "full_name": username.title(),
    })
    assert response.status_code == 201, response.text
    return response.json()


def as_user(user):
    return {"X-User-Id": str(user["id"])}


def create_event(client, owner, **fields):
    body = {
        "title": "Event",
        "date": "2024-03-01",
        "start_time": "09:00",
        "period": "morning",
        "privacy": "private",
    }
    body.update(fields)
    response = client.post("/api/events", json=body, headers=as_user(owner))
    assert response.status_code == 201, response.text
    return response.json()


def link_partners(client, inviter, invitee):
    response = client.post(
        "/api/partners/invite",
        json={"partner_email": invitee["email"]},
        headers=as_user(inviter),
    )
    assert response.status_code == 201, response.text
    link = response.json()
    response = client.put(
        f"/api/partners/{link['id']}/status",
        json={"status": "accepted"},
        headers=as_user(invitee),
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def alice(client):
    return register(client, "alice")


@pytest.fixture
def bob(client):
    return register(client, "bob")


@pytest.fixture
def carol(client):
    return register(client, "carol")


class TestIdentity:

    def test_missing_header_is_unauthorized(self, client):
        response = client.get("/api/events")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_non_integer_header_is_unauthorized(self, client):
        response = client.get("/api/events", headers={"X-User-Id": "alice"})

        assert response.status_code == 401

    def test_me(self, client, alice):
        response = client.get("/api/users/me", headers=as_user(alice))

        assert response.status_code == 200
        assert response.json()["username"] == "alice"


class TestUsers:

    def test_duplicate_email_conflicts(self, client, alice):
        response = client.post("/api/users", json={
            "username": "alice2",
            "email": "alice@example.com",
            "full_name": "Alice Again",
        })

        assert response.status_code == 409

    def test_unknown_user(self, client, alice):
        response = client.get("/api/users/999", headers=as_user(alice))

        assert response.status_code == 404


class TestEvents:

    def test_create_and_get(self, client, alice):
        event = create_event(client, alice, title="Dinner", privacy="partner")

        response = client.get(f"/api/events/{event['id']}", headers=as_user(alice))

        assert response.status_code == 200
        assert response.json()["title"] == "Dinner"
        assert response.json()["owner_id"] == alice["id"]

    def test_invalid_body_lists_fields(self, client, alice):
        response = client.post(
            "/api/events",
            json={"title": "No date", "start_time": "09:00", "period": "noon"},
            headers=as_user(alice),
        )

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert "date" in errors
        assert "period" in errors

    def test_unknown_grant_permission_is_rejected(self, client, alice, bob):
        response = client.post("/api/events", json={
            "title": "Trip",
            "date": "2024-03-01",
            "start_time": "09:00",
            "period": "morning",
            "partners": [{"user_id": bob["id"], "permission": "admin"}],
        }, headers=as_user(alice))

        assert response.status_code == 400
        assert "partners.0.permission" in response.json()["errors"]

    def test_stranger_gets_forbidden(self, client, alice, carol):
        event = create_event(client, alice, title="Diary")

        assert client.get(f"/api/events/{event['id']}", headers=as_user(carol)).status_code == 403
        assert client.get(f"/api/events/{event['id']}/comments", headers=as_user(carol)).status_code == 403

    def test_missing_event(self, client, alice):
        assert client.get("/api/events/404", headers=as_user(alice)).status_code == 404

    def test_only_owner_updates_and_deletes(self, client, alice, bob):
        event = create_event(client, alice, title="Trip", partners=[{"user_id": bob["id"], "permission": "edit"}])

        update = client.put(f"/api/events/{event['id']}", json={"title": "Mine"}, headers=as_user(bob))
        delete = client.delete(f"/api/events/{event['id']}", headers=as_user(bob))

        assert update.status_code == 403
        assert delete.status_code == 403

    def test_owner_deletes(self, client, alice):
        event = create_event(client, alice)

        assert client.delete(f"/api/events/{event['id']}", headers=as_user(alice)).status_code == 204
        assert client.get(f"/api/events/{event['id']}", headers=as_user(alice)).status_code == 404

    def test_date_range_query(self, client, alice):
        create_event(client, alice, title="March", date="2024-03-10")
        create_event(client, alice, title="April", date="2024-04-10")

        response = client.get(
            "/api/events",
            params={"startDate": "2024-04-01", "endDate": "2024-04-30"},
            headers=as_user(alice),
        )

        assert [e["title"] for e in response.json()] == ["April"]


class TestPartnerSharing:

    def test_accepted_invitee_sees_shared_feed(self, client, alice, bob):
        create_event(client, alice, title="Dinner", privacy="partner")
        create_event(client, alice, title="Diary", privacy="private")
        link_partners(client, alice, bob)

        shared = client.get("/api/events/shared", headers=as_user(bob)).json()
        participants = client.get(f"/api/events/{shared[0]['id']}/participants", headers=as_user(bob)).json()

        assert [e["title"] for e in shared] == ["Dinner"]
        assert participants["owner"]["id"] == alice["id"]
        assert [p["user_id"] for p in participants["participants"]] == [bob["id"]]

    def test_partner_lists(self, client, alice, bob):
        client.post("/api/partners/invite", json={"partner_email": bob["email"]}, headers=as_user(alice))

        incoming = client.get("/api/partners/requests", headers=as_user(bob)).json()
        outgoing = client.get("/api/partners/requests/outgoing", headers=as_user(alice)).json()

        assert [r["counterpart"]["id"] for r in incoming] == [alice["id"]]
        assert [r["counterpart"]["id"] for r in outgoing] == [bob["id"]]

    def test_inviter_cannot_accept(self, client, alice, bob):
        link = client.post(
            "/api/partners/invite",
            json={"partner_email": bob["email"]},
            headers=as_user(alice),
        ).json()

        response = client.put(f"/api/partners/{link['id']}/status", json={"status": "accepted"}, headers=as_user(alice))

        assert response.status_code == 403

    def test_invite_unknown_email(self, client, alice):
        response = client.post(
            "/api/partners/invite",
            json={"partner_email": "ghost@example.com"},
            headers=as_user(alice),
        )

        assert response.status_code == 404


class TestCollaboration:

    def test_comment_and_react(self, client, alice, bob):
        event = create_event(client, alice, title="Concert", privacy="public")
        headers = as_user(bob)

        comment = client.post(f"/api/events/{event['id']}/comments", json={"content": "Count me in"}, headers=headers)
        reply = client.post(
            f"/api/events/{event['id']}/comments",
            json={"content": "Great", "parent_id": comment.json()["id"]},
            headers=as_user(alice),
        )
        client.post(f"/api/events/{event['id']}/reactions", json={"type": "heart"}, headers=headers)
        client.post(f"/api/events/{event['id']}/reactions", json={"type": "fire"}, headers=headers)

        threads = client.get(f"/api/events/{event['id']}/comments/threads", headers=headers).json()
        reactions = client.get(f"/api/events/{event['id']}/reactions", headers=headers).json()

        assert comment.status_code == 201
        assert reply.status_code == 201
        assert threads[0]["comment"]["content"] == "Count me in"
        assert [r["content"] for r in threads[0]["replies"]] == ["Great"]
        assert [(r["user_id"], r["type"]) for r in reactions] == [(bob["id"], "fire")]

    def test_remove_reaction(self, client, alice, bob):
        event = create_event(client, alice, privacy="public")
        client.post(f"/api/events/{event['id']}/reactions", json={"type": "heart"}, headers=as_user(bob))

        response = client.delete(f"/api/events/{event['id']}/reactions", headers=as_user(bob))

        assert response.status_code == 204
        assert client.get(f"/api/events/{event['id']}/reactions", headers=as_user(bob)).json() == []


class TestExternalCalendars:

    def test_link_and_list(self, client, alice, bob):
        response = client.post("/api/external-calendars", json={
            "provider": "google",
            "external_id": "alice@gmail.com",
            "name": "Work",
        }, headers=as_user(alice))

        assert response.status_code == 201
        assert response.json()["sync_enabled"] is True
        assert [c["name"] for c in client.get("/api/external-calendars", headers=as_user(alice)).json()] == ["Work"]
        assert client.get("/api/external-calendars", headers=as_user(bob)).json() == []
