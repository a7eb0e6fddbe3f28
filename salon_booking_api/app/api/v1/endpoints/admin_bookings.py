"""
Booking management endpoints for the admin dashboard.

Listing requires an admin token.  The mutation endpoints accept any
verified token, customer tokens included; they rely on the
``BookingService`` for validation and return the booking as stored
after the change.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.security import get_current_claims, require_admin
from salon_booking_api.app.schemas.booking import BookingRead, BookingStatusUpdate, StatusChange
from salon_booking_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("", response_model=List[BookingRead])
def list_bookings(
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> List[BookingRead]:
    """List all bookings, newest first."""
    return BookingService.list_bookings(db)


@router.patch("/{booking_id}/cancel", response_model=BookingRead)
def cancel_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(get_current_claims),
) -> BookingRead:
    """Cancel a booking.  Cancelling twice leaves it cancelled."""
    return BookingService.cancel_booking(db, booking_id)


@router.patch("/{booking_id}/status/{value}", response_model=BookingRead)
def set_booking_status(
    booking_id: str = Path(..., description="ID of the booking"),
    value: str = Path(..., description="pending, confirmed, cancelled or postponed"),
    body: Optional[StatusChange] = Body(None),
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(get_current_claims),
) -> BookingRead:
    """Change the status of a booking, optionally rescheduling it.

    Returns 400 ``Invalid status value`` for an unknown status, whatever
    the body holds, then 400 for a ``date`` not in ``YYYY-MM-DD`` form,
    and 404 when the booking does not exist.
    """
    date = body.date if body else None
    return BookingService.set_status(db, booking_id, value, date)


@router.patch("/{booking_id}", response_model=BookingRead)
def update_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    body: BookingStatusUpdate = Body(...),
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(get_current_claims),
) -> BookingRead:
    """Change the status of a booking from a JSON body ``{"status": ...}``."""
    return BookingService.update_status(db, booking_id, body.status)
