"""
Pydantic models for customer and admin accounts.

Password hashes never leave the service layer: the read models below
simply have no ``password`` field.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import EMAIL_PATTERN, DocumentModel, ObjectIdStr


class LoginRequest(BaseModel):
    """Credentials for both the admin and the customer login.

    Deliberately unvalidated beyond presence so that a malformed email
    gets the same ``Invalid credentials`` answer as an unknown one.
    """

    email: str = Field(..., examples=["admin@salon.com"])
    password: str = Field(..., examples=["secret123"])


class AdminRegister(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6)


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=1)


class CustomerRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: str
    phone: str
    password: str


class CustomerProfile(BaseModel):
    """Subset of a customer returned next to a freshly issued token."""

    id: str
    name: str
    email: str
    phone: str


class CustomerAuthResponse(BaseModel):
    token: str
    customer: CustomerProfile


class CustomerRead(DocumentModel):
    id: ObjectIdStr = Field(..., alias="_id")
    name: str
    email: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class AdminRead(DocumentModel):
    id: ObjectIdStr = Field(..., alias="_id")
    email: str
    role: str = "admin"
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class AdminIdentity(BaseModel):
    admin: str


class CurrentUser(BaseModel):
    user: CustomerRead | AdminRead


class ProfileUpdate(BaseModel):
    """Body of ``PUT /auth/profile``.  Every field is optional."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = None
    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")
    preferences: Optional[Dict[str, Any]] = None


class CustomerDetails(CustomerProfile):
    preferences: Dict[str, Any] = {}


class ProfileResponse(BaseModel):
    customer: CustomerDetails


class CustomerStats(DocumentModel):
    """A customer row on the admin dashboard with booking statistics."""

    id: ObjectIdStr = Field(..., alias="_id")
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    total_bookings: int = Field(0, alias="totalBookings")
    total_spent: float = Field(0, alias="totalSpent")
    last_booking: Optional[str] = Field(None, alias="lastBooking")
