"""
Pydantic models for bookings.

A booking references the booked service (``serviceId``) and, when the
client was signed in, the customer (``customerId``).  ``status`` is
one of ``BOOKING_STATUSES``; any status may be replaced by any other.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import DATE_PATTERN, EMAIL_PATTERN, TIME_PATTERN, DocumentModel, ObjectIdStr
from .service import ServiceSummary

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "postponed")


class BookingCreate(BaseModel):
    """Payload for ``POST /api/bookings``."""

    model_config = ConfigDict(populate_by_name=True)

    service_id: str = Field(..., alias="serviceId", examples=["665f1c2b9d1e4a0012345678"])
    date: str = Field(..., pattern=DATE_PATTERN, examples=["2024-06-01"])
    time: str = Field(..., pattern=TIME_PATTERN, examples=["14:30"])
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1)
    notes: Optional[str] = None


class StatusChange(BaseModel):
    """Optional body of ``PATCH /bookings/{id}/status/{value}``.

    When ``date`` is given the booking is rescheduled to it together
    with the status change (typically with ``postponed``).
    """

    # Format is checked by the service, after the status value.
    date: Optional[str] = Field(None, examples=["2024-06-01"])


class BookingStatusUpdate(BaseModel):
    """Body of ``PATCH /bookings/{id}``.  Validated by the service."""

    status: Optional[str] = None


class BookingRead(DocumentModel):
    id: ObjectIdStr = Field(..., alias="_id")
    service_id: Optional[ObjectIdStr] = Field(None, alias="serviceId")
    service_name: Optional[str] = Field(None, alias="serviceName")
    date: str
    time: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    customer_id: Optional[ObjectIdStr] = Field(None, alias="customerId")
    status: str = "pending"
    payment_status: str = Field("pending", alias="paymentStatus")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class BookingCreated(BaseModel):
    message: str = "Booking saved"
    booking: BookingRead


class AvailableSlots(BaseModel):
    slots: list[str]
    duration: int


class CustomerBooking(BookingRead):
    """A booking in the customer's history, with the booked service filled in."""

    # ``None`` when the service has since been deleted.
    service_id: Optional[ServiceSummary] = Field(None, alias="serviceId")
