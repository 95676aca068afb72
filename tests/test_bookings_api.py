"""
Booking request/response lifecycle.
"""

import pytest

from conftest import bearer

pytestmark = pytest.mark.api


@pytest.fixture
def owner(api, admin_token):
    return api.approved_owner("owner@example.com", admin_token)


@pytest.fixture
def prop(api, owner):
    return api.add_property(owner.token, title="Sea View", location="Goa").json()


@pytest.fixture
def renter_token(api):
    return api.token_for("renter@example.com")


def _request(client, token, property_id, **extra):
    body = {"propertyId": property_id, "message": "Is it free in May?"}
    body.update(extra)
    return client.post("/api/bookings/request", json=body, headers=bearer(token))


def test_request_accept_flow(client, owner, prop, renter_token):
    res = _request(client, renter_token, prop["id"])
    assert res.status_code == 201
    booking = res.json()["booking"]
    assert booking["status"] == "pending"
    assert booking["ownerId"] == owner.id
    assert booking["propertyTitle"] == "Sea View"

    incoming = client.get("/api/owner/bookings", headers=bearer(owner.token)).json()
    assert len(incoming) == 1
    assert incoming[0]["status"] == "pending"
    assert incoming[0]["renterEmail"] == "renter@example.com"
    assert incoming[0]["propertyTitle"] == "Sea View"

    res = client.patch(
        f"/api/owner/bookings/{booking['id']}/status",
        json={"status": "accepted"},
        headers=bearer(owner.token),
    )
    assert res.status_code == 200
    assert res.json()["status"] == "accepted"

    mine = client.get("/api/bookings/mine", headers=bearer(renter_token)).json()
    assert mine[0]["status"] == "accepted"
    assert mine[0]["propertyLocation"] == "Goa"
    assert mine[0]["ownerEmail"] == "owner@example.com"
    assert mine[0]["ownerPhone"]


def test_client_supplied_status_is_ignored(client, prop, renter_token):
    res = _request(client, renter_token, prop["id"], status="accepted")
    assert res.json()["booking"]["status"] == "pending"


def test_request_needs_auth_and_existing_property(client, prop, renter_token):
    assert _request(client, "", prop["id"]).status_code == 401
    assert _request(client, renter_token, 99999).status_code == 404
    assert _request(client, renter_token, None).status_code == 404


def test_duplicate_pending_requests_are_allowed(client, prop, renter_token):
    _request(client, renter_token, prop["id"])
    _request(client, renter_token, prop["id"])
    mine = client.get("/api/bookings/mine", headers=bearer(renter_token)).json()
    assert len(mine) == 2
    assert mine[0]["id"] > mine[1]["id"]


def test_invalid_status_rejected(client, owner, prop, renter_token):
    booking = _request(client, renter_token, prop["id"]).json()["booking"]
    res = client.patch(
        f"/api/owner/bookings/{booking['id']}/status",
        json={"status": "cancelled"},
        headers=bearer(owner.token),
    )
    assert res.status_code == 400

    res = client.patch(
        f"/api/owner/bookings/{booking['id']}/status",
        json={},
        headers=bearer(owner.token),
    )
    assert res.status_code == 400


def test_other_owner_gets_404_like_missing(api, client, admin_token, prop, renter_token):
    intruder = api.approved_owner("intruder@example.com", admin_token)
    booking = _request(client, renter_token, prop["id"]).json()["booking"]

    foreign = client.patch(
        f"/api/owner/bookings/{booking['id']}/status",
        json={"status": "rejected"},
        headers=bearer(intruder.token),
    )
    missing = client.patch(
        "/api/owner/bookings/99999/status",
        json={"status": "rejected"},
        headers=bearer(intruder.token),
    )
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()
    assert client.get("/api/owner/bookings", headers=bearer(intruder.token)).json() == []


def test_renter_cannot_use_owner_endpoints(client, prop, renter_token):
    assert client.get("/api/owner/bookings", headers=bearer(renter_token)).status_code == 403


def test_snapshot_title_survives_property_edit(client, owner, prop, renter_token):
    booking = _request(client, renter_token, prop["id"]).json()["booking"]
    client.patch(
        f"/api/owner/properties/{prop['id']}",
        data={"title": "Renamed"},
        headers=bearer(owner.token),
    )
    res = client.patch(
        f"/api/owner/bookings/{booking['id']}/status",
        json={"status": "rejected"},
        headers=bearer(owner.token),
    )
    assert res.json()["propertyTitle"] == "Sea View"


def test_booking_outlives_deleted_property(client, owner, prop, renter_token):
    _request(client, renter_token, prop["id"])
    client.delete(f"/api/owner/properties/{prop['id']}", headers=bearer(owner.token))

    mine = client.get("/api/bookings/mine", headers=bearer(renter_token)).json()
    assert len(mine) == 1
    assert mine[0]["propertyTitle"] is None
    assert mine[0]["propertyLocation"] is None
    assert mine[0]["status"] == "pending"

    incoming = client.get("/api/owner/bookings", headers=bearer(owner.token)).json()
    assert incoming[0]["propertyTitle"] == "Sea View"
