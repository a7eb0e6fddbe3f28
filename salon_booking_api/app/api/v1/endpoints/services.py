"""
Service catalogue endpoints.

Listing is public so the booking form can show prices and durations
before anyone signs in; adding a service needs an admin token.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.security import require_admin
from salon_booking_api.app.schemas.service import ServiceCreate, ServiceRead
from salon_booking_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.get("", response_model=List[ServiceRead])
def list_services(db: MongoGateway = Depends(get_db)) -> List[ServiceRead]:
    """List all services, oldest first."""
    return CatalogService.list_services(db)


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    service: ServiceCreate,
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> ServiceRead:
    return CatalogService.create_service(db, service)
