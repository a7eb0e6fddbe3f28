"""
Business logic for customer accounts.

Customers register with name, email, phone and password.  Both
registration and login answer with a token (``type`` claim
``"customer"``) and a small profile for the booking UI.  Signed-in
customers can read their booking history and edit their profile; the
admin dashboard lists every customer with booking totals.
"""

import logging
import re
from typing import Any, Dict, List

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from salon_booking_api.app.core.db import MongoGateway, parse_object_id, utcnow
from salon_booking_api.app.core.exceptions import InvalidCredentials, NotFound, ValidationFailed
from salon_booking_api.app.core.security import (
    CUSTOMER,
    check_password,
    create_access_token,
    hash_password,
    is_bcrypt_hash,
)
from salon_booking_api.app.schemas.booking import CustomerBooking
from salon_booking_api.app.schemas.common import EMAIL_PATTERN, PHONE_PATTERN
from salon_booking_api.app.schemas.user import (
    CustomerAuthResponse,
    CustomerDetails,
    CustomerProfile,
    CustomerRead,
    CustomerRegister,
    CustomerStats,
    ProfileResponse,
    ProfileUpdate,
)
from salon_booking_api.app.services.catalog_service import booking_price, parse_price, service_prices

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _auth_response(customer: Dict[str, Any]) -> CustomerAuthResponse:
    customer_id = str(customer["_id"])
    token = create_access_token({"id": customer_id, "email": customer["email"], "type": CUSTOMER})
    return CustomerAuthResponse(
        token=token,
        customer=CustomerProfile(
            id=customer_id,
            name=customer.get("name", ""),
            email=customer["email"],
            phone=customer.get("phone", ""),
        ),
    )


class CustomerService:
    """Service for customer accounts, their profiles and booking history."""

    @classmethod
    def authenticate(cls, db: MongoGateway, email: str, password: str) -> CustomerAuthResponse:
        """Check customer credentials.

        Raises ``InvalidCredentials`` for an unknown email and for a
        wrong password alike.
        """
        customer = db.customers.find_one({"email": email})
        if not check_password(password, customer.get("password") if customer else None):
            logger.info("Failed customer login for %s", email)
            raise InvalidCredentials()
        if is_bcrypt_hash(customer["password"]):
            db.customers.update_one(
                {"_id": customer["_id"]},
                {"$set": {"password": hash_password(password), "updatedAt": utcnow()}},
            )
            logger.info("Replaced bcrypt hash for customer %s", email)
        logger.info("Customer %s logged in", email)
        return _auth_response(customer)

    @classmethod
    def register(cls, db: MongoGateway, data: CustomerRegister) -> CustomerAuthResponse:
        if not (data.name and data.email and data.phone and data.password):
            raise ValidationFailed("All fields are required")
        if not re.match(EMAIL_PATTERN, data.email):
            raise ValidationFailed("Invalid email format")
        if not re.match(PHONE_PATTERN, data.phone):
            raise ValidationFailed("Invalid phone number format")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed("Password must be at least 6 characters")
        if db.customers.find_one({"email": data.email}):
            raise ValidationFailed("Customer with this email already exists")

        now = utcnow()
        doc = {
            "name": data.name,
            "email": data.email,
            "phone": data.phone,
            "password": hash_password(data.password),
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            result = db.customers.insert_one(doc)
        except DuplicateKeyError as exc:
            raise ValidationFailed("Customer with this email already exists") from exc
        doc["_id"] = result.inserted_id
        logger.info("Customer %s registered", data.email)
        return _auth_response(doc)

    @classmethod
    def get_customer(cls, db: MongoGateway, customer_id: Any) -> CustomerRead:
        oid = parse_object_id(customer_id)
        customer = db.customers.find_one({"_id": oid}) if oid else None
        if not customer:
            raise NotFound("Customer not found")
        return CustomerRead.model_validate(customer)

    @classmethod
    def booking_history(cls, db: MongoGateway, claims: Dict[str, Any]) -> List[CustomerBooking]:
        """Bookings linked to the customer or made under their email, newest first.

        Bookings placed before the account existed carry no
        ``customerId`` and are found by email.
        """
        match: List[Dict[str, Any]] = [{"email": claims.get("email")}]
        customer_oid = parse_object_id(claims.get("id"))
        if customer_oid is not None:
            match.append({"customerId": customer_oid})
        bookings = list(db.bookings.find({"$or": match}).sort("createdAt", DESCENDING))

        service_ids = list({b.get("serviceId") for b in bookings if b.get("serviceId") is not None})
        services = {
            s["_id"]: s
            for s in db.services.find(
                {"_id": {"$in": service_ids}}, {"name": 1, "description": 1, "duration": 1, "price": 1}
            )
        }
        result = []
        for booking in bookings:
            populated = dict(booking)
            populated["serviceId"] = services.get(booking.get("serviceId"))
            result.append(CustomerBooking.model_validate(populated))
        return result

    @classmethod
    def update_profile(cls, db: MongoGateway, claims: Dict[str, Any], data: ProfileUpdate) -> ProfileResponse:
        """Change name, phone, preferences and, with the current one, the password."""
        oid = parse_object_id(claims.get("id"))
        customer = db.customers.find_one({"_id": oid}) if oid else None
        if not customer:
            raise NotFound("Customer not found")

        fields: Dict[str, Any] = {}
        if data.name:
            fields["name"] = data.name
        if data.phone:
            if not re.match(PHONE_PATTERN, data.phone):
                raise ValidationFailed("Invalid phone number format")
            fields["phone"] = data.phone
        if data.preferences:
            fields["preferences"] = {**(customer.get("preferences") or {}), **data.preferences}
        if data.current_password and data.new_password:
            if not check_password(data.current_password, customer.get("password")):
                raise ValidationFailed("Current password is incorrect")
            if len(data.new_password) < MIN_PASSWORD_LENGTH:
                raise ValidationFailed("New password must be at least 6 characters")
            fields["password"] = hash_password(data.new_password)

        if fields:
            customer = db.customers.find_one_and_update(
                {"_id": oid},
                {"$set": {**fields, "updatedAt": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
            if customer is None:
                raise NotFound("Customer not found")
            logger.info("Customer %s updated profile fields %s", customer["email"], sorted(fields))

        return ProfileResponse(
            customer=CustomerDetails(
                id=str(customer["_id"]),
                name=customer.get("name", ""),
                email=customer["email"],
                phone=customer.get("phone", ""),
                preferences=customer.get("preferences") or {},
            )
        )

    @classmethod
    def list_customers(cls, db: MongoGateway) -> List[CustomerStats]:
        """Customers newest first, each with totals over the bookings under their email."""
        customers = list(db.customers.find({}, {"password": 0}).sort("createdAt", DESCENDING))
        emails = [c["email"] for c in customers]
        by_email: Dict[str, List[Dict[str, Any]]] = {}
        for booking in db.bookings.find({"email": {"$in": emails}}):
            by_email.setdefault(booking["email"], []).append(booking)
        prices = service_prices(
            db, (b.get("serviceId") for bookings in by_email.values() for b in bookings)
        )

        result = []
        for customer in customers:
            bookings = by_email.get(customer["email"], [])
            dates = [b["date"] for b in bookings if b.get("date")]
            result.append(
                CustomerStats.model_validate(
                    {
                        **customer,
                        "totalBookings": len(bookings),
                        "totalSpent": sum(parse_price(booking_price(b, prices)) for b in bookings),
                        "lastBooking": max(dates) if dates else None,
                    }
                )
            )
        return result
