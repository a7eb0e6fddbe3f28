"""Tests for the admin loyalty overview."""

from bson import ObjectId


def _loyalty(gateway, customer_id, spent, bookings):
    return gateway.customer_loyalty.insert_one(
        {"customerId": customer_id, "points": int(spent), "totalSpent": spent, "totalBookings": bookings, "tier": "bronze"}
    ).inserted_id


def test_loyalty_requires_admin(client, customer_headers):
    assert client.get("/api/admin/loyalty").status_code == 401
    assert client.get("/api/admin/loyalty", headers=customer_headers).status_code == 401


def test_loyalty_sorted_by_spend_then_bookings(client, gateway, customer, admin_headers):
    low = _loyalty(gateway, customer["_id"], 50.0, 9)
    tie_more_bookings = _loyalty(gateway, ObjectId(), 200.0, 7)
    tie_fewer_bookings = _loyalty(gateway, ObjectId(), 200.0, 3)
    top = _loyalty(gateway, ObjectId(), 500.0, 1)

    response = client.get("/api/admin/loyalty", headers=admin_headers)

    assert response.status_code == 200
    assert [r["_id"] for r in response.json()] == [
        str(top),
        str(tie_more_bookings),
        str(tie_fewer_bookings),
        str(low),
    ]


def test_loyalty_populates_customer_name_and_email(client, gateway, customer, admin_headers):
    _loyalty(gateway, customer["_id"], 80.0, 2)
    _loyalty(gateway, ObjectId(), 10.0, 1)

    records = client.get("/api/admin/loyalty", headers=admin_headers).json()

    assert records[0]["customerId"] == {
        "_id": str(customer["_id"]),
        "name": "Jane Doe",
        "email": "jane@example.com",
    }
    assert records[1]["customerId"] is None
    assert "password" not in str(records)
