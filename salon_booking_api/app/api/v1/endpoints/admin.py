"""
Admin account endpoints and the customer and loyalty overviews.

``/admin/login`` issues the admin token every other admin-gated route
checks for.  Unknown emails and wrong passwords get the same 401
response.
"""

from typing import List

from fastapi import APIRouter, Depends

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.security import require_admin
from salon_booking_api.app.schemas.common import MessageResponse, TokenResponse
from salon_booking_api.app.schemas.loyalty import LoyaltyRead
from salon_booking_api.app.schemas.user import (
    AdminIdentity,
    AdminRegister,
    ChangePasswordRequest,
    CustomerStats,
    LoginRequest,
)
from salon_booking_api.app.services.admin_service import AdminService
from salon_booking_api.app.services.customer_service import CustomerService
from salon_booking_api.app.services.loyalty_service import LoyaltyService


router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def admin_login(credentials: LoginRequest, db: MongoGateway = Depends(get_db)) -> TokenResponse:
    """Exchange admin email and password for a bearer token."""
    token = AdminService.authenticate(db, credentials.email, credentials.password)
    return TokenResponse(token=token)


@router.post("/register", response_model=MessageResponse)
def admin_register(payload: AdminRegister, db: MongoGateway = Depends(get_db)) -> MessageResponse:
    """Create an admin account.  Fails with 400 if the email is taken."""
    AdminService.register(db, payload.email, payload.password)
    return MessageResponse(message="Admin created")


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> MessageResponse:
    AdminService.change_password(db, current_admin, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/me", response_model=AdminIdentity)
def whoami(current_admin: dict = Depends(require_admin)) -> AdminIdentity:
    """Email of the admin the token was issued to."""
    return AdminIdentity(admin=current_admin.get("email", ""))


@router.get("/loyalty", response_model=List[LoyaltyRead])
def list_loyalty(
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> List[LoyaltyRead]:
    """Loyalty records ordered by total spent, then total bookings, both descending."""
    return LoyaltyService.list_loyalty(db)


@router.get("/customers", response_model=List[CustomerStats])
def list_customers(
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> List[CustomerStats]:
    """Customers newest first with their booking count, spend and last booking date."""
    return CustomerService.list_customers(db)
