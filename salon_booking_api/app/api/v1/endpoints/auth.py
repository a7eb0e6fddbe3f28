"""
Customer authentication endpoints.

Registration and login both return ``{"token", "customer"}``.  The
``/auth/me`` route resolves a token of either account type back to
its stored profile.  Booking history, loyalty standing and profile
edits need a customer token.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.exceptions import InvalidToken
from salon_booking_api.app.core.security import ADMIN, CUSTOMER, get_current_claims, require_customer
from salon_booking_api.app.schemas.booking import CustomerBooking
from salon_booking_api.app.schemas.loyalty import LoyaltySummary
from salon_booking_api.app.schemas.user import (
    CurrentUser,
    CustomerAuthResponse,
    CustomerRegister,
    LoginRequest,
    ProfileResponse,
    ProfileUpdate,
)
from salon_booking_api.app.services.admin_service import AdminService
from salon_booking_api.app.services.customer_service import CustomerService
from salon_booking_api.app.services.loyalty_service import LoyaltyService


router = APIRouter()


@router.post("/login", response_model=CustomerAuthResponse)
def customer_login(credentials: LoginRequest, db: MongoGateway = Depends(get_db)) -> CustomerAuthResponse:
    """Exchange customer email and password for a token and profile."""
    return CustomerService.authenticate(db, credentials.email, credentials.password)


@router.post("/register", response_model=CustomerAuthResponse, status_code=status.HTTP_201_CREATED)
def customer_register(payload: CustomerRegister, db: MongoGateway = Depends(get_db)) -> CustomerAuthResponse:
    return CustomerService.register(db, payload)


@router.get("/me", response_model=CurrentUser)
def current_user(
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(get_current_claims),
) -> CurrentUser:
    """Profile of the token's owner, without the password hash."""
    account_type = claims.get("type")
    if account_type == CUSTOMER:
        return CurrentUser(user=CustomerService.get_customer(db, claims.get("id")))
    if account_type == ADMIN:
        return CurrentUser(user=AdminService.get_admin(db, claims.get("id")))
    if not account_type:
        raise InvalidToken()
    raise InvalidToken("Invalid user type")


@router.get("/bookings", response_model=List[CustomerBooking])
def my_bookings(
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(require_customer),
) -> List[CustomerBooking]:
    """The customer's bookings, newest first, with the booked service embedded."""
    return CustomerService.booking_history(db, claims)


@router.get("/loyalty", response_model=LoyaltySummary)
def my_loyalty(
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(require_customer),
) -> LoyaltySummary:
    return LoyaltyService.customer_summary(db, claims)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdate,
    db: MongoGateway = Depends(get_db),
    claims: dict = Depends(require_customer),
) -> ProfileResponse:
    """Update name, phone or preferences; a password change needs the current password."""
    return CustomerService.update_profile(db, claims, payload)
