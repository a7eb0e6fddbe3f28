"""
Customer loyalty records.

The admin dashboard lists every record with the referenced customer's
name and email filled in.  A customer reading their own standing for
the first time gets a record seeded from the bookings under their
email: one point per whole unit spent, starting at ``bronze``.
"""

import logging
import math
from typing import Any, Dict, List

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from salon_booking_api.app.core.db import MongoGateway, parse_object_id, utcnow
from salon_booking_api.app.core.exceptions import NotFound
from salon_booking_api.app.schemas.loyalty import LoyaltyRead, LoyaltySummary, RecentBooking
from salon_booking_api.app.services.catalog_service import booking_price, parse_price, service_prices

logger = logging.getLogger(__name__)

RECENT_BOOKINGS = 5


class LoyaltyService:

    @classmethod
    def list_loyalty(cls, db: MongoGateway) -> List[LoyaltyRead]:
        """All records, biggest spenders first, then by number of bookings."""
        records = list(
            db.customer_loyalty.find().sort([("totalSpent", DESCENDING), ("totalBookings", DESCENDING)])
        )
        customer_ids = [r["customerId"] for r in records if r.get("customerId") is not None]
        customers = {
            c["_id"]: c
            for c in db.customers.find({"_id": {"$in": customer_ids}}, {"name": 1, "email": 1})
        }
        result = []
        for record in records:
            populated = dict(record)
            populated["customerId"] = customers.get(record.get("customerId"))
            result.append(LoyaltyRead.model_validate(populated))
        return result

    @classmethod
    def customer_summary(cls, db: MongoGateway, claims: Dict[str, Any]) -> LoyaltySummary:
        """The signed-in customer's loyalty record, created on first access."""
        oid = parse_object_id(claims.get("id"))
        customer = db.customers.find_one({"_id": oid}) if oid else None
        if not customer:
            raise NotFound("Customer not found")

        bookings = list(db.bookings.find({"email": customer["email"]}).sort("createdAt", DESCENDING))
        prices = service_prices(db, (b.get("serviceId") for b in bookings))

        record = db.customer_loyalty.find_one({"customerId": oid})
        if record is None:
            record = cls._seed_record(db, oid, bookings, prices)

        recent = [
            RecentBooking(
                id=b["_id"],
                service_name=b.get("serviceName"),
                date=b.get("date"),
                amount=booking_price(b, prices),
                status=b.get("status"),
            )
            for b in bookings[:RECENT_BOOKINGS]
        ]
        return LoyaltySummary(
            points=record.get("points", 0),
            total_spent=record.get("totalSpent", 0),
            total_bookings=record.get("totalBookings", 0),
            tier=record.get("tier", "bronze"),
            badges=record.get("badges", []),
            milestones=record.get("milestones", []),
            active_discounts=record.get("activeDiscounts", []),
            last_activity=record.get("lastActivity"),
            recent_bookings=recent,
        )

    @staticmethod
    def _seed_record(db: MongoGateway, customer_oid, bookings, prices) -> Dict[str, Any]:
        total_spent = sum(parse_price(booking_price(b, prices)) for b in bookings)
        record = {
            "customerId": customer_oid,
            "points": math.floor(total_spent),
            "totalSpent": total_spent,
            "totalBookings": len(bookings),
            "tier": "bronze",
            "badges": [],
            "milestones": [],
            "activeDiscounts": [],
            "lastActivity": bookings[0].get("createdAt") if bookings else utcnow(),
        }
        try:
            db.customer_loyalty.insert_one(record)
        except DuplicateKeyError:
            # Seeded by a concurrent request in the meantime.
            return db.customer_loyalty.find_one({"customerId": customer_oid})
        logger.info("Loyalty record created for customer %s", customer_oid)
        return record
