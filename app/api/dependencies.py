# ============================================================================
# FILE: app/api/dependencies.py
# Tenant resolution dependencies for dashboard routes
# ============================================================================
from typing import Optional
import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.models.tenant import Tenant, TenantStatus
from app.services.tenant.tenant_service import TenantService

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-Slug"

INACTIVE_STATUSES = (TenantStatus.SUSPENDED, TenantStatus.CANCELLED, TenantStatus.EXPIRED)


def get_optional_tenant(
        x_tenant_slug: Optional[str] = Header(None, alias=TENANT_HEADER),
        db: Session = Depends(get_db)
) -> Optional[Tenant]:
    """
    Resolve the tenant named by the X-Tenant-Slug header.

    Returns None when the header is absent (e.g. onboarding step 1, which
    creates the tenant). An unknown slug is an error.
    """
    if not x_tenant_slug:
        return None

    tenant = TenantService.get_tenant_by_slug(db, x_tenant_slug)
    if not tenant:
        logger.warning(f"Tenant not found for header slug '{x_tenant_slug}'")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found"
        )

    if tenant.status in INACTIVE_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Tenant account is {tenant.status.value}"
        )

    return tenant


def get_current_tenant(tenant: Optional[Tenant] = Depends(get_optional_tenant)) -> Tenant:
    """Same as get_optional_tenant but the header is required"""
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {TENANT_HEADER} header"
        )
    return tenant
