"""
Catalogue maintenance for the admin dashboard.

New services are added through ``POST /services``; these routes edit
and remove existing ones.  A service that bookings still refer to
cannot be deleted.
"""

from fastapi import APIRouter, Depends, Path, Response, status

from salon_booking_api.app.core.db import MongoGateway, get_db
from salon_booking_api.app.core.security import require_admin
from salon_booking_api.app.schemas.service import ServiceRead, ServiceUpdate
from salon_booking_api.app.services.catalog_service import CatalogService


router = APIRouter()


@router.patch("/{service_id}", response_model=ServiceRead)
def update_service(
    payload: ServiceUpdate,
    service_id: str = Path(..., description="ID of the service"),
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> ServiceRead:
    """Change some fields of a service.  409 when the new name is taken."""
    return CatalogService.update_service(db, service_id, payload)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_service(
    service_id: str = Path(..., description="ID of the service"),
    db: MongoGateway = Depends(get_db),
    current_admin: dict = Depends(require_admin),
) -> Response:
    CatalogService.delete_service(db, service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
