"""
Top‑level router for version 1 of the API.

This router aggregates the domain‑specific routers under their path
prefixes.  When a new area is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import admin, admin_bookings, admin_services, auth, bookings, services

router = APIRouter()

router.include_router(admin_bookings.router, prefix="/admin/bookings", tags=["admin bookings"])
router.include_router(admin_services.router, prefix="/admin/services", tags=["admin services"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
