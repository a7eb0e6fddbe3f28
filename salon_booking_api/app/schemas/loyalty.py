"""Pydantic models for customer loyalty records."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import DocumentModel, ObjectIdStr
from .service import Price


class LoyaltyCustomer(DocumentModel):
    """The populated ``customerId`` reference."""

    id: ObjectIdStr = Field(..., alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None


class LoyaltyRead(DocumentModel):
    id: ObjectIdStr = Field(..., alias="_id")
    # ``None`` when the referenced customer no longer exists.
    customer: Optional[LoyaltyCustomer] = Field(None, alias="customerId")
    points: int = 0
    total_spent: float = Field(0, alias="totalSpent")
    total_bookings: int = Field(0, alias="totalBookings")
    tier: str = "bronze"
    last_activity: Optional[datetime] = Field(None, alias="lastActivity")


class RecentBooking(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr
    service_name: Optional[str] = Field(None, alias="serviceName")
    date: Optional[str] = None
    amount: Optional[Price] = None
    status: Optional[str] = None


class LoyaltySummary(BaseModel):
    """A customer's own loyalty standing and their five latest bookings."""

    model_config = ConfigDict(populate_by_name=True)

    points: int = 0
    total_spent: float = Field(0, alias="totalSpent")
    total_bookings: int = Field(0, alias="totalBookings")
    tier: str = "bronze"
    badges: List[Any] = []
    milestones: List[Any] = []
    active_discounts: List[Any] = Field([], alias="activeDiscounts")
    last_activity: Optional[datetime] = Field(None, alias="lastActivity")
    recent_bookings: List[RecentBooking] = Field([], alias="recentBookings")
