"""
Public booking endpoints.

Anyone may book; a customer token, when attached, links the booking to
that customer's account.  Slot availability is computed from the
bookings already stored for the requested date.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.security import get_optional_claims
from salon_booking_api.app.schemas.booking import AvailableSlots, BookingCreate, BookingCreated
from salon_booking_api.app.services.booking_service import BookingService
from salon_booking_api.app.services.slot_service import SlotService


router = APIRouter()


@router.post("", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking: BookingCreate,
    db: MongoGateway = Depends(get_db),
    claims: Optional[dict] = Depends(get_optional_claims),
) -> BookingCreated:
    """Create a ``pending`` booking for an existing service."""
    created = BookingService.create_booking(db, booking, claims)
    return BookingCreated(booking=created)


@router.get("/available-slots", response_model=AvailableSlots)
def available_slots(
    date: Optional[str] = Query(None, description="Day to check, YYYY-MM-DD"),
    service_id: Optional[str] = Query(None, alias="serviceId", description="Service to fit"),
    db: MongoGateway = Depends(get_db),
) -> AvailableSlots:
    """Start times on ``date`` with enough free time for the service."""
    return SlotService.available_slots(db, date, service_id)
