"""Tests for public booking intake and slot availability."""

from bson import ObjectId

from salon_booking_api.app.services.slot_service import (
    compute_available_slots,
    display_time,
    parse_duration,
    parse_time,
)
from tests.conftest import make_booking

BOOKING = {
    "date": "2024-05-20",
    "time": "14:30",
    "name": "Sam Smith",
    "email": "sam@example.com",
    "phone": "+15550001111",
    "notes": "First visit",
}


def test_create_booking_anonymous(client, gateway, haircut):
    response = client.post("/api/bookings", json={**BOOKING, "serviceId": str(haircut["_id"])})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Booking saved"
    booking = body["booking"]
    assert booking["status"] == "pending"
    assert booking["serviceName"] == "Haircut"
    assert booking["customerId"] is None
    stored = gateway.bookings.find_one({"_id": ObjectId(booking["_id"])})
    assert stored["serviceId"] == haircut["_id"]


def test_create_booking_links_customer_from_token(client, gateway, haircut, customer, customer_headers):
    response = client.post(
        "/api/bookings", json={**BOOKING, "serviceId": str(haircut["_id"])}, headers=customer_headers
    )
    assert response.status_code == 201
    assert response.json()["booking"]["customerId"] == str(customer["_id"])


def test_create_booking_unknown_service(client):
    response = client.post("/api/bookings", json={**BOOKING, "serviceId": str(ObjectId())})
    assert response.status_code == 404
    assert response.json() == {"error": "Service not found"}


def test_create_booking_rejects_bad_payload_before_writing(client, gateway, haircut):
    response = client.post(
        "/api/bookings", json={**BOOKING, "serviceId": str(haircut["_id"]), "time": "25:99"}
    )
    assert response.status_code == 400
    assert gateway.bookings.count_documents({}) == 0


def test_create_booking_with_invalid_token_is_401(client, haircut):
    response = client.post(
        "/api/bookings",
        json={**BOOKING, "serviceId": str(haircut["_id"])},
        headers={"Authorization": "Bearer broken"},
    )
    assert response.status_code == 401


def test_parse_helpers():
    assert parse_duration("45 min") == 45
    assert parse_duration("about an hour") == 60
    assert parse_duration(None) == 60
    assert parse_duration(45) == 45
    assert parse_duration(30.0) == 30
    assert parse_duration(0) == 60
    assert parse_time("09:15") == 555
    assert parse_time("later") is None
    assert display_time(9 * 60) == "9:00 AM"
    assert display_time(12 * 60 + 45) == "12:45 PM"
    assert display_time(17 * 60 + 15) == "5:15 PM"


def test_empty_day_offers_every_start_that_fits():
    slots = compute_available_slots([], 60)
    assert slots[0] == "9:00 AM"
    assert slots[-1] == "5:00 PM"
    assert len(slots) == 33


def test_booked_time_blocks_overlapping_starts():
    # 10:00-11:00 taken; a 30 minute service can start at 9:30 but not 9:45.
    slots = compute_available_slots([(10 * 60, 60)], 30)
    assert "9:30 AM" in slots
    assert "9:45 AM" not in slots
    assert "10:30 AM" not in slots
    assert "11:00 AM" in slots


def test_available_slots_endpoint(client, gateway, haircut):
    make_booking(gateway, haircut, date="2024-05-20", time="10:00")
    make_booking(gateway, haircut, date="2024-05-20", time="13:00", status="cancelled")
    make_booking(gateway, haircut, date="2024-05-21", time="15:00")

    response = client.get(
        "/api/bookings/available-slots", params={"date": "2024-05-20", "serviceId": str(haircut["_id"])}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["duration"] == 60
    assert "9:00 AM" in body["slots"]
    assert "9:15 AM" not in body["slots"]
    assert "10:45 AM" not in body["slots"]
    assert "11:00 AM" in body["slots"]
    assert "1:00 PM" in body["slots"]
    assert "3:00 PM" in body["slots"]


def test_available_slots_requires_parameters(client):
    response = client.get("/api/bookings/available-slots", params={"date": "2024-05-20"})
    assert response.status_code == 400
    assert response.json() == {"error": "Date and serviceId are required"}


def test_available_slots_unknown_service(client):
    response = client.get(
        "/api/bookings/available-slots", params={"date": "2024-05-20", "serviceId": str(ObjectId())}
    )
    assert response.status_code == 404


def test_available_slots_with_numeric_durations(client, gateway):
    service_id = gateway.services.insert_one(
        {"name": "Colour", "description": "Full colour", "price": 120, "duration": 90}
    ).inserted_id
    make_booking(gateway, {"_id": service_id, "name": "Colour"}, date="2024-05-20", time="10:00")

    response = client.get(
        "/api/bookings/available-slots", params={"date": "2024-05-20", "serviceId": str(service_id)}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["duration"] == 90
    # 10:00-11:30 is taken, so no 90 minute appointment can start from 9:00 to 11:15.
    assert "9:00 AM" not in body["slots"]
    assert "11:15 AM" not in body["slots"]
    assert "11:30 AM" in body["slots"]
    assert body["slots"][-1] == "4:30 PM"
