"""Tests for the ``SalonAPI`` client, run against the app through its test client."""

import pytest
from bson import ObjectId

from salon_booking_client import SalonAPI, SalonAPIError
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, make_booking

BOOKING = {
    "date": "2024-05-20",
    "time": "11:00",
    "name": "Sam Smith",
    "email": "sam@example.com",
    "phone": "+15550001111",
}


@pytest.fixture
def api(client):
    return SalonAPI(base_url="http://testserver", session=client)


def test_get_services(api, haircut):
    services = api.get_services()
    assert [s["name"] for s in services] == ["Haircut"]


def test_get_available_slots(api, haircut):
    result = api.get_available_slots("2024-05-20", str(haircut["_id"]))
    assert result["duration"] == 60
    assert "9:00 AM" in result["slots"]


def test_get_available_slots_hides_server_detail(api):
    with pytest.raises(SalonAPIError) as excinfo:
        api.get_available_slots("2024-05-20", str(ObjectId()))
    assert excinfo.value.message == "Failed to fetch available slots"
    assert excinfo.value.status_code == 404


def test_submit_booking_returns_booking(api, haircut):
    booking = api.submit_booking({**BOOKING, "serviceId": str(haircut["_id"])})
    assert booking["status"] == "pending"
    assert booking["serviceName"] == "Haircut"


def test_submit_booking_attaches_token(api, haircut, customer, customer_headers):
    token = customer_headers["Authorization"].split(" ", 1)[1]
    booking = api.submit_booking({**BOOKING, "serviceId": str(haircut["_id"])}, token=token)
    assert booking["customerId"] == str(customer["_id"])


def test_submit_booking_surfaces_server_error(api):
    with pytest.raises(SalonAPIError) as excinfo:
        api.submit_booking({**BOOKING, "serviceId": str(ObjectId())})
    assert excinfo.value.message == "Service not found"
    assert excinfo.value.status_code == 404


def test_operator_calls(api, gateway, admin, haircut):
    booking = make_booking(gateway, haircut)

    api.admin_login(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert [b["_id"] for b in api.list_bookings()] == [str(booking["_id"])]

    updated = api.set_booking_status(str(booking["_id"]), "postponed", date="2024-06-03")
    assert (updated["status"], updated["date"]) == ("postponed", "2024-06-03")

    assert api.cancel_booking(str(booking["_id"]))["status"] == "cancelled"

    with pytest.raises(SalonAPIError, match="Invalid status value"):
        api.set_booking_status(str(booking["_id"]), "bogus")


def test_admin_login_failure(api, admin):
    with pytest.raises(SalonAPIError, match="Invalid credentials"):
        api.admin_login(ADMIN_EMAIL, "wrong")
