"""
Business logic for bookings.

The ``BookingService`` creates bookings, lists them for the admin
dashboard and applies status changes.  Status changes are plain
overwrites: the only rule is that the new value belongs to
``BOOKING_STATUSES``.  Concurrent updates to the same booking are
last-write-wins; every update returns the document as stored after
the write.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, ReturnDocument

from salon_booking_api.app.core.db import MongoGateway, parse_object_id, utcnow
from salon_booking_api.app.core.exceptions import InvalidStatus, NotFound, ValidationFailed
from salon_booking_api.app.core.security import CUSTOMER
from salon_booking_api.app.schemas.booking import BOOKING_STATUSES, BookingCreate, BookingRead
from salon_booking_api.app.schemas.common import DATE_PATTERN

logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating, listing and updating bookings."""

    @classmethod
    def create_booking(
        cls,
        db: MongoGateway,
        payload: BookingCreate,
        claims: Optional[Dict[str, Any]] = None,
    ) -> BookingRead:
        """Store a new ``pending`` booking for an existing service.

        The service name is copied onto the booking so that the
        dashboard keeps showing it after the service is renamed or
        removed.  When the request carries a customer token, the
        booking is linked to that customer.
        """
        service_oid = parse_object_id(payload.service_id)
        service = db.services.find_one({"_id": service_oid}) if service_oid else None
        if not service:
            raise NotFound("Service not found")

        now = utcnow()
        doc: Dict[str, Any] = {
            "serviceId": service_oid,
            "serviceName": service.get("name"),
            "date": payload.date,
            "time": payload.time,
            "name": payload.name,
            "email": payload.email,
            "phone": payload.phone,
            "status": "pending",
            "paymentStatus": "pending",
            "createdAt": now,
            "updatedAt": now,
        }
        if payload.notes:
            doc["notes"] = payload.notes
        if claims and claims.get("type") == CUSTOMER:
            customer_oid = parse_object_id(claims.get("id"))
            if customer_oid is not None:
                doc["customerId"] = customer_oid

        result = db.bookings.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(
            "Booking %s created for %s on %s %s", result.inserted_id, payload.email, payload.date, payload.time
        )
        return BookingRead.model_validate(doc)

    @classmethod
    def list_bookings(cls, db: MongoGateway) -> List[BookingRead]:
        """Return every booking, newest first."""
        cursor = db.bookings.find().sort("createdAt", DESCENDING)
        return [BookingRead.model_validate(doc) for doc in cursor]

    @classmethod
    def cancel_booking(cls, db: MongoGateway, booking_id: str) -> BookingRead:
        """Mark a booking ``cancelled`` whatever its current status."""
        return cls._update(db, booking_id, {"status": "cancelled"})

    @classmethod
    def set_status(
        cls, db: MongoGateway, booking_id: str, value: str, date: Optional[str] = None
    ) -> BookingRead:
        """Set ``status`` to ``value`` and, if given, move the booking to ``date``.

        The value is checked first, before the date and before the
        database is touched, so an invalid value never modifies the
        record.
        """
        if value not in BOOKING_STATUSES:
            raise InvalidStatus()
        if date and not re.match(DATE_PATTERN, date):
            raise ValidationFailed("date: must be YYYY-MM-DD")
        fields: Dict[str, Any] = {"status": value}
        if date:
            fields["date"] = date
        return cls._update(db, booking_id, fields)

    @classmethod
    def update_status(cls, db: MongoGateway, booking_id: str, value: Optional[str]) -> BookingRead:
        """JSON-body flavour of ``set_status`` used by the dashboard table."""
        if not value or value not in BOOKING_STATUSES:
            raise InvalidStatus("Invalid status")
        return cls._update(db, booking_id, {"status": value})

    @staticmethod
    def _update(db: MongoGateway, booking_id: str, fields: Dict[str, Any]) -> BookingRead:
        oid = parse_object_id(booking_id)
        if oid is None:
            raise NotFound("Booking not found")
        updated = db.bookings.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFound("Booking not found")
        logger.info("Booking %s updated: %s", booking_id, fields)
        return BookingRead.model_validate(updated)
