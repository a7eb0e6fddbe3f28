"""Business logic for the service catalogue."""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

from salon_booking_api.app.core.db import MongoGateway, parse_object_id, utcnow
from salon_booking_api.app.core.exceptions import Conflict, NotFound, ValidationFailed
from salon_booking_api.app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def parse_price(value: Any) -> float:
    """Amount of a stored price, ``"$65.00"`` and ``65`` alike; 0 when unreadable."""
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0
    try:
        return float(_NON_NUMERIC.sub("", value))
    except ValueError:
        return 0.0


def service_prices(db: MongoGateway, service_ids: Iterable[Any]) -> Dict[ObjectId, Any]:
    """Stored ``price`` of each listed service, keyed by ``_id``."""
    ids = list({sid for sid in service_ids if sid is not None})
    if not ids:
        return {}
    return {s["_id"]: s.get("price") for s in db.services.find({"_id": {"$in": ids}}, {"price": 1})}


def booking_price(booking: Dict[str, Any], prices: Dict[ObjectId, Any]) -> Optional[Any]:
    """The booking's own price, else the price of the service it booked."""
    if booking.get("price") is not None:
        return booking["price"]
    return prices.get(booking.get("serviceId"))


class CatalogService:
    """Service for listing and maintaining salon services."""

    @classmethod
    def list_services(cls, db: MongoGateway) -> List[ServiceRead]:
        """Return all services in the order they were created."""
        cursor = db.services.find().sort("createdAt", ASCENDING)
        return [ServiceRead.model_validate(doc) for doc in cursor]

    @classmethod
    def create_service(cls, db: MongoGateway, data: ServiceCreate) -> ServiceRead:
        """Add a service.  The price is stored as a display string (``"$65.00"``)."""
        now = utcnow()
        doc = {
            "name": data.name.strip(),
            "description": data.description.strip(),
            "duration": data.duration,
            "price": format_price(data.price),
            "category": data.category or "General",
            "createdAt": now,
            "updatedAt": now,
        }
        result = db.services.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Service %s created: %s", result.inserted_id, doc["name"])
        return ServiceRead.model_validate(doc)

    @classmethod
    def update_service(cls, db: MongoGateway, service_id: str, data: ServiceUpdate) -> ServiceRead:
        """Apply the given fields to a service and return it as stored.

        Renaming onto the name of another service raises ``Conflict``.
        """
        fields: Dict[str, Any] = {}
        if data.name is not None:
            if not data.name.strip():
                raise ValidationFailed("Service name cannot be empty")
            fields["name"] = data.name.strip()
        if data.description is not None:
            if not data.description.strip():
                raise ValidationFailed("Service description cannot be empty")
            fields["description"] = data.description.strip()
        if data.duration is not None:
            if isinstance(data.duration, str):
                if not data.duration.strip():
                    raise ValidationFailed("Duration cannot be empty")
                fields["duration"] = data.duration.strip()
            elif data.duration <= 0:
                raise ValidationFailed("Duration must be a positive number")
            else:
                fields["duration"] = data.duration
        if data.price is not None:
            if isinstance(data.price, str):
                if not data.price.strip():
                    raise ValidationFailed("Service price cannot be empty")
                fields["price"] = data.price.strip()
            elif data.price <= 0:
                raise ValidationFailed("Price must be a positive number")
            else:
                fields["price"] = format_price(data.price)
        if data.category is not None:
            fields["category"] = data.category.strip() or "General"

        oid = parse_object_id(service_id)
        existing = db.services.find_one({"_id": oid}) if oid else None
        if not existing:
            raise NotFound("Service not found")
        if "name" in fields and fields["name"] != existing.get("name"):
            if db.services.find_one({"name": fields["name"], "_id": {"$ne": oid}}):
                raise Conflict("Service with this name already exists")

        updated = db.services.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if updated is None:
            raise NotFound("Service not found")
        logger.info("Service %s updated: %s", service_id, sorted(fields))
        return ServiceRead.model_validate(updated)

    @classmethod
    def delete_service(cls, db: MongoGateway, service_id: str) -> None:
        """Remove a service that no booking refers to."""
        oid = parse_object_id(service_id)
        if oid is None or not db.services.find_one({"_id": oid}, {"_id": 1}):
            raise NotFound("Service not found")
        booking_count = db.bookings.count_documents({"serviceId": oid})
        if booking_count:
            raise Conflict("Cannot delete service that has existing bookings", bookingCount=booking_count)
        db.services.delete_one({"_id": oid})
        logger.info("Service %s deleted", service_id)
