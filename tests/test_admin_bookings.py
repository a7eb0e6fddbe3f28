"""Tests for the admin booking list and the booking status endpoints."""

import pytest
from bson import ObjectId

from tests.conftest import make_booking

STATUSES = ["pending", "confirmed", "cancelled", "postponed"]


def test_list_bookings_requires_token(client):
    response = client.get("/api/admin/bookings")
    assert response.status_code == 401
    assert response.json() == {"error": "Missing token"}


def test_list_bookings_rejects_customer_token(client, customer_headers):
    response = client.get("/api/admin/bookings", headers=customer_headers)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_list_bookings_rejects_garbage_token(client):
    response = client.get("/api/admin/bookings", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert "error" in response.json()


def test_list_bookings_newest_first(client, gateway, haircut, admin_headers):
    old = make_booking(gateway, haircut, minutes_after_base=0)
    newest = make_booking(gateway, haircut, minutes_after_base=30)
    middle = make_booking(gateway, haircut, minutes_after_base=10)

    response = client.get("/api/admin/bookings", headers=admin_headers)

    assert response.status_code == 200
    ids = [b["_id"] for b in response.json()]
    assert ids == [str(newest["_id"]), str(middle["_id"]), str(old["_id"])]
    assert response.json()[0]["serviceId"] == str(haircut["_id"])


@pytest.mark.parametrize("value", STATUSES)
def test_set_status_persists_each_allowed_value(client, gateway, haircut, admin_headers, value):
    booking = make_booking(gateway, haircut, status="pending" if value != "pending" else "confirmed")

    response = client.patch(f"/api/admin/bookings/{booking['_id']}/status/{value}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["status"] == value
    assert gateway.bookings.find_one({"_id": booking["_id"]})["status"] == value


@pytest.mark.parametrize("value", ["bogus", "CONFIRMED", "done"])
def test_set_status_rejects_unknown_value_and_leaves_record(client, gateway, haircut, admin_headers, value):
    booking = make_booking(gateway, haircut, status="confirmed")

    response = client.patch(
        f"/api/admin/bookings/{booking['_id']}/status/{value}",
        json={"date": "2024-07-01"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status value"}
    stored = gateway.bookings.find_one({"_id": booking["_id"]})
    assert stored["status"] == "confirmed"
    assert stored["date"] == "2024-05-20"


def test_set_status_with_date_reschedules(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut)

    response = client.patch(
        f"/api/admin/bookings/{booking['_id']}/status/postponed",
        json={"date": "2024-06-01"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "postponed"
    assert body["date"] == "2024-06-01"
    assert gateway.bookings.find_one({"_id": booking["_id"]})["date"] == "2024-06-01"


def test_set_status_rejects_malformed_date(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut)
    response = client.patch(
        f"/api/admin/bookings/{booking['_id']}/status/confirmed",
        json={"date": "next tuesday"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "date: must be YYYY-MM-DD"}
    assert gateway.bookings.find_one({"_id": booking["_id"]})["status"] == "pending"


def test_unknown_status_wins_over_malformed_date(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut, status="confirmed")

    response = client.patch(
        f"/api/admin/bookings/{booking['_id']}/status/bogus",
        json={"date": "tomorrow"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status value"}
    stored = gateway.bookings.find_one({"_id": booking["_id"]})
    assert stored["status"] == "confirmed"
    assert stored["date"] == "2024-05-20"


def test_set_status_unknown_booking_is_404(client, admin_headers):
    response = client.patch(f"/api/admin/bookings/{ObjectId()}/status/confirmed", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Booking not found"}


def test_set_status_requires_token(client, gateway, haircut):
    booking = make_booking(gateway, haircut)
    response = client.patch(f"/api/admin/bookings/{booking['_id']}/status/confirmed")
    assert response.status_code == 401
    assert response.json() == {"error": "Missing token"}


def test_cancel_is_idempotent(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut, status="confirmed")
    url = f"/api/admin/bookings/{booking['_id']}/cancel"

    first = client.patch(url, headers=admin_headers)
    second = client.patch(url, headers=admin_headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["status"] == second.json()["status"] == "cancelled"
    assert gateway.bookings.find_one({"_id": booking["_id"]})["status"] == "cancelled"


def test_cancel_accepts_customer_token(client, gateway, haircut, customer_headers):
    booking = make_booking(gateway, haircut)
    response = client.patch(f"/api/admin/bookings/{booking['_id']}/cancel", headers=customer_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"


@pytest.mark.parametrize("booking_id", [str(ObjectId()), "not-an-object-id"])
def test_cancel_unknown_booking_is_404(client, admin_headers, booking_id):
    response = client.patch(f"/api/admin/bookings/{booking_id}/cancel", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Booking not found"}


def test_update_with_json_status(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut)
    response = client.patch(
        f"/api/admin/bookings/{booking['_id']}", json={"status": "confirmed"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"


@pytest.mark.parametrize("body", [{}, {"status": "archived"}])
def test_update_with_json_rejects_bad_status(client, gateway, haircut, admin_headers, body):
    booking = make_booking(gateway, haircut)
    response = client.patch(f"/api/admin/bookings/{booking['_id']}", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status"}


def test_updates_refresh_updated_at(client, gateway, haircut, admin_headers):
    booking = make_booking(gateway, haircut)
    client.patch(f"/api/admin/bookings/{booking['_id']}/cancel", headers=admin_headers)
    assert gateway.bookings.find_one({"_id": booking["_id"]}).get("updatedAt") is not None
