"""Shared fixtures: an in-memory MongoDB and an app wired to it."""

from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from salon_booking_api.app.core.db import MongoGateway
from salon_booking_api.app.core.security import ADMIN, CUSTOMER, create_access_token, hash_password
from salon_booking_api.app.main import create_app

ADMIN_EMAIL = "admin@salon.com"
ADMIN_PASSWORD = "admin-secret"
CUSTOMER_EMAIL = "jane@example.com"
CUSTOMER_PASSWORD = "jane-secret"

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def gateway():
    return MongoGateway(mongomock.MongoClient(), "salon-test")


@pytest.fixture
def client(gateway):
    with TestClient(create_app(gateway)) as test_client:
        yield test_client


@pytest.fixture
def admin(gateway):
    doc = {
        "email": ADMIN_EMAIL,
        "password": hash_password(ADMIN_PASSWORD),
        "role": "admin",
        "createdAt": BASE_TIME,
    }
    doc["_id"] = gateway.admin_users.insert_one(doc).inserted_id
    return doc


@pytest.fixture
def customer(gateway):
    doc = {
        "name": "Jane Doe",
        "email": CUSTOMER_EMAIL,
        "phone": "+15551234567",
        "password": hash_password(CUSTOMER_PASSWORD),
        "createdAt": BASE_TIME,
    }
    doc["_id"] = gateway.customers.insert_one(doc).inserted_id
    return doc


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"id": str(admin["_id"]), "email": admin["email"], "type": ADMIN})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer):
    token = create_access_token({"id": str(customer["_id"]), "email": customer["email"], "type": CUSTOMER})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def haircut(gateway):
    doc = {
        "name": "Haircut",
        "description": "Wash, cut and style",
        "price": "$65.00",
        "duration": "60 min",
        "category": "Hair",
        "createdAt": BASE_TIME,
    }
    doc["_id"] = gateway.services.insert_one(doc).inserted_id
    return doc


def make_booking(gateway, service, minutes_after_base=0, **overrides):
    """Insert a booking created ``minutes_after_base`` minutes after ``BASE_TIME``."""
    doc = {
        "serviceId": service["_id"],
        "serviceName": service["name"],
        "date": "2024-05-20",
        "time": "10:00",
        "name": "Jane Doe",
        "email": CUSTOMER_EMAIL,
        "phone": "+15551234567",
        "status": "pending",
        "paymentStatus": "pending",
        "createdAt": BASE_TIME + timedelta(minutes=minutes_after_base),
    }
    doc.update(overrides)
    doc["_id"] = gateway.bookings.insert_one(doc).inserted_id
    return doc
