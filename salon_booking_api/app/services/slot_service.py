"""
Availability of appointment slots.

The salon day runs from 09:00 to 18:00 in 15-minute steps.  A slot is
free when no non-cancelled booking on that date covers it; a start time
is offered only when the requested service fits into consecutive free
slots before closing.
"""

import re
from typing import Iterable, List, Optional, Tuple, Union

from salon_booking_api.app.core.db import MongoGateway, parse_object_id
from salon_booking_api.app.core.exceptions import NotFound, ValidationFailed
from salon_booking_api.app.schemas.booking import AvailableSlots

OPENING_HOUR = 9
CLOSING_HOUR = 18
SLOT_MINUTES = 15
DEFAULT_DURATION = 60

_DIGITS = re.compile(r"(\d+)")


def parse_duration(duration: Union[str, int, float, None], default: int = DEFAULT_DURATION) -> int:
    """Minutes from a stored duration: a number, or a label such as ``"45 min"``."""
    if isinstance(duration, (int, float)):
        return int(duration) if duration > 0 else default
    if not isinstance(duration, str):
        return default
    match = _DIGITS.search(duration)
    return int(match.group(1)) if match else default


def parse_time(value: Optional[str]) -> Optional[int]:
    """Minutes after midnight for ``"HH:MM"``, or ``None`` if unparseable."""
    try:
        hour, minute = (int(part) for part in (value or "").split(":")[:2])
    except ValueError:
        return None
    return hour * 60 + minute


def display_time(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def compute_available_slots(booked: Iterable[Tuple[int, int]], duration: int) -> List[str]:
    """Start times that fit a ``duration``-minute appointment.

    ``booked`` holds ``(start_minutes, length_minutes)`` pairs for the
    existing bookings of the day.
    """
    starts = list(range(OPENING_HOUR * 60, CLOSING_HOUR * 60, SLOT_MINUTES))
    free = [True] * len(starts)
    for begin, length in booked:
        for i, slot in enumerate(starts):
            if begin <= slot < begin + length:
                free[i] = False

    required = -(-duration // SLOT_MINUTES)
    result = []
    for i, slot in enumerate(starts):
        window = free[i:i + required]
        if len(window) == required and all(window):
            result.append(display_time(slot))
    return result


class SlotService:
    """Looks up a day's bookings and reports the free start times."""

    @classmethod
    def available_slots(
        cls, db: MongoGateway, date: Optional[str], service_id: Optional[str]
    ) -> AvailableSlots:
        if not date or not service_id:
            raise ValidationFailed("Date and serviceId are required")
        service_oid = parse_object_id(service_id)
        service = db.services.find_one({"_id": service_oid}) if service_oid else None
        if not service:
            raise NotFound("Service not found")
        duration = parse_duration(service.get("duration"))

        bookings = list(db.bookings.find({"date": date, "status": {"$ne": "cancelled"}}))
        service_ids = {b.get("serviceId") for b in bookings if b.get("serviceId") is not None}
        durations = {
            s["_id"]: parse_duration(s.get("duration"))
            for s in db.services.find({"_id": {"$in": list(service_ids)}})
        }

        booked = []
        for booking in bookings:
            start = parse_time(booking.get("time"))
            if start is None:
                continue
            booked.append((start, durations.get(booking.get("serviceId"), DEFAULT_DURATION)))

        return AvailableSlots(slots=compute_available_slots(booked, duration), duration=duration)
