# app/api/v1/dashboard/services.py
"""
Service Item Management API Endpoints
Handles CRUD operations for a tenant's bookable service catalog
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, List
from pydantic import BaseModel, Field
from decimal import Decimal
import logging

from app.api.dependencies import get_current_tenant
from app.config.database import get_db
from app.models.service_item import ServiceItem, ServiceCategory
from app.models.tenant import Tenant

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/services", tags=["dashboard-services"])


# ============================================================================
# Request/Response Models
# ============================================================================

class ServiceItemCreate(BaseModel):
    """Request model for creating a service item"""
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    base_price: Decimal = Field(..., ge=0, le=100000)
    duration_minutes: int = Field(60, ge=15, le=480, description="Duration in minutes")
    category: ServiceCategory = ServiceCategory.GENERAL
    is_bookable_online: bool = True


class ServiceItemUpdate(BaseModel):
    """Request model for updating a service item"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    base_price: Optional[Decimal] = Field(None, ge=0, le=100000)
    duration_minutes: Optional[int] = Field(None, ge=15, le=480)
    category: Optional[ServiceCategory] = None
    is_active: Optional[bool] = None
    is_bookable_online: Optional[bool] = None


class ServiceItemResponse(BaseModel):
    """Response model for service item data"""
    id: int
    tenant_id: int
    name: str
    description: Optional[str]
    base_price: Optional[float]
    formatted_price: str
    duration_minutes: int
    formatted_duration: str
    category: Optional[str]
    is_active: bool
    is_bookable_online: bool


class ServiceItemListResponse(BaseModel):
    """Response model for service item list"""
    total: int
    services: List[ServiceItemResponse]


# ============================================================================
# Helper Functions
# ============================================================================

def _get_tenant_service(db: Session, tenant: Tenant, service_id: int) -> ServiceItem:
    service = db.query(ServiceItem).filter(
        ServiceItem.id == service_id,
        ServiceItem.tenant_id == tenant.id
    ).first()
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


# ============================================================================
# Endpoints
# ============================================================================

@router.post("", response_model=ServiceItemResponse, status_code=201)
def create_service(
        service_data: ServiceItemCreate,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Create a new service item
    """
    try:
        service = ServiceItem(
            tenant_id=tenant.id,
            name=service_data.name,
            description=service_data.description,
            base_price=service_data.base_price,
            duration_minutes=service_data.duration_minutes,
            category=service_data.category,
            is_active=True,
            is_bookable_online=service_data.is_bookable_online
        )

        db.add(service)
        db.commit()
        db.refresh(service)

        logger.info(f"Created service item {service.id} for tenant {tenant.slug}: {service.name}")
        return ServiceItemResponse(**service.to_dict())

    except Exception as e:
        logger.error(f"Error creating service item: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Could not create service")


@router.get("", response_model=ServiceItemListResponse)
def list_services(
        include_inactive: bool = False,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    List the tenant's service items
    """
    query = db.query(ServiceItem).filter(ServiceItem.tenant_id == tenant.id)

    if not include_inactive:
        query = query.filter(ServiceItem.is_active.is_(True))

    services = query.order_by(ServiceItem.name).all()

    return ServiceItemListResponse(
        total=len(services),
        services=[ServiceItemResponse(**s.to_dict()) for s in services]
    )


@router.get("/{service_id}", response_model=ServiceItemResponse)
def get_service(
        service_id: int,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Get service item by ID
    """
    return ServiceItemResponse(**_get_tenant_service(db, tenant, service_id).to_dict())


@router.patch("/{service_id}", response_model=ServiceItemResponse)
def update_service(
        service_id: int,
        update_data: ServiceItemUpdate,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Update a service item; only provided fields change
    """
    service = _get_tenant_service(db, tenant, service_id)

    try:
        for key, value in update_data.model_dump(exclude_unset=True).items():
            setattr(service, key, value)

        db.commit()
        db.refresh(service)

        logger.info(f"Updated service item {service_id} for tenant {tenant.slug}")
        return ServiceItemResponse(**service.to_dict())

    except Exception as e:
        logger.error(f"Error updating service item: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Could not update service")


@router.delete("/{service_id}")
def deactivate_service(
        service_id: int,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Deactivate a service item (soft delete); existing appointments keep their reference
    """
    service = _get_tenant_service(db, tenant, service_id)

    service.is_active = False
    db.commit()

    logger.info(f"Deactivated service item {service_id} for tenant {tenant.slug}")
    return {
        "success": True,
        "message": "Service deactivated"
    }
