# app/api/v1/dashboard/onboarding.py
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_optional_tenant
from app.config.database import get_db
from app.config.settings import get_settings
from app.core.exceptions import AvailabilityRulesError
from app.models.service_item import ServiceItem
from app.models.tenant import Tenant, TenantStatus
from app.schemas.availability import validate_availability_rules
from app.schemas.onboarding import (
    CompleteOnboardingRequest,
    OnboardingStatusResponse,
    OnboardingStep1Request,
    OnboardingStep2Request,
    OnboardingStep3Request,
    SlugCheckRequest,
    SlugCheckResponse,
    TenantSummary,
)
from app.services.tenant.slug_service import SlugService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["onboarding"])


# ========== HELPER FUNCTIONS ==========

def require_tenant(tenant: Optional[Tenant]) -> Tenant:
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Complete step 1 first"
        )
    return tenant


def build_status(db: Session, tenant: Tenant) -> OnboardingStatusResponse:
    """Onboarding status payload for a tenant"""
    settings = get_settings()
    service_count = db.query(ServiceItem).filter(ServiceItem.tenant_id == tenant.id).count()

    return OnboardingStatusResponse(
        is_completed=tenant.onboarding_completed,
        current_step=tenant.onboarding_step,
        completed_at=tenant.onboarding_completed_at,
        tenant=TenantSummary(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            booking_enabled=tenant.booking_enabled,
            service_item_count=service_count
        ),
        public_booking_url=f"{settings.BASE_URL}/book/{tenant.slug}" if tenant.booking_enabled else None
    )


def apply_business_info(db: Session, tenant: Optional[Tenant], data: OnboardingStep1Request) -> Tenant:
    """
    Step 1 writes: create the tenant or update its profile.
    Flushes but does not commit.
    """
    settings = get_settings()

    if tenant is None:
        slug = data.slug or SlugService.get_unique_slug(db, data.business_name)

        if not SlugService.is_slug_available(db, slug):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Slug is already taken. Please choose a different one."
            )

        tenant = Tenant(
            slug=slug,
            name=data.business_name,
            timezone=settings.DEFAULT_TIMEZONE,
            status=TenantStatus.TRIAL,
            trial_ends_at=datetime.now(timezone.utc) + timedelta(days=settings.TRIAL_DAYS),
            onboarding_step=1,
            media_storage_path=f"/tenants/{slug}/media"
        )
        db.add(tenant)
        logger.info(f"Creating tenant '{slug}' from onboarding")
    else:
        new_slug = data.slug or tenant.slug
        if new_slug != tenant.slug:
            if not SlugService.is_slug_available(db, new_slug, exclude_tenant_id=tenant.id):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Slug is already taken. Please choose a different one."
                )
            tenant.slug = new_slug
            tenant.media_storage_path = f"/tenants/{new_slug}/media"

        tenant.onboarding_step = max(tenant.onboarding_step or 0, 1)

    tenant.name = data.business_name
    tenant.business_address = data.business_address
    tenant.city = data.city
    tenant.state = data.state
    tenant.zip_code = data.zip_code
    tenant.phone = data.phone
    tenant.email = data.email
    tenant.website = data.website
    tenant.description = data.description

    db.flush()
    return tenant


def apply_availability(db: Session, tenant: Tenant, data: OnboardingStep2Request) -> Tenant:
    """Step 2 writes: validated availability rules"""
    try:
        validate_availability_rules(data.availability_rules)
    except AvailabilityRulesError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    tenant.set_availability_rules(data.availability_rules)
    tenant.timezone = data.availability_rules.timezone
    tenant.onboarding_step = max(tenant.onboarding_step or 0, 2)

    db.flush()
    return tenant


def apply_first_service(db: Session, tenant: Tenant, data: OnboardingStep3Request) -> Tenant:
    """Step 3 writes: first service item, then onboarding complete and booking on"""
    if not tenant.availability_rules:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Complete step 2 first (set availability rules)"
        )

    db.add(ServiceItem(
        tenant_id=tenant.id,
        name=data.service_name,
        description=data.service_description,
        base_price=data.base_price,
        duration_minutes=data.duration_minutes,
        category=data.category,
        is_active=True,
        is_bookable_online=True
    ))

    tenant.onboarding_step = 3
    tenant.onboarding_completed = True
    tenant.onboarding_completed_at = datetime.now(timezone.utc)
    tenant.booking_enabled = True

    db.flush()
    return tenant


# ========== STATUS & SLUGS ==========

@router.get("/status", response_model=OnboardingStatusResponse)
def get_onboarding_status(
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Current onboarding progress (step 0 when no tenant exists yet)
    """
    if tenant is None:
        return OnboardingStatusResponse(is_completed=False, current_step=0)

    return build_status(db, tenant)


@router.post("/check-slug", response_model=SlugCheckResponse)
def check_slug(
        request: SlugCheckRequest,
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Check whether a slug can be used, with a suggestion when it cannot
    """
    exclude_id = tenant.id if tenant else None

    if SlugService.is_slug_available(db, request.slug, exclude_tenant_id=exclude_id):
        return SlugCheckResponse(is_available=True, message="This slug is available!")

    suggestions = SlugService.suggest_alternative_slugs(db, request.slug)
    message = "This slug is already taken." if SlugService.is_valid_slug(request.slug) else \
        "Slug must be 3-30 characters: lowercase letters, numbers, and hyphens."

    return SlugCheckResponse(
        is_available=False,
        message=message,
        suggested_slug=suggestions[0] if suggestions else None
    )


@router.get("/suggest-slug", response_model=SlugCheckResponse)
def suggest_slug(
        business_name: str = Query(..., description="Business name to derive the slug from"),
        db: Session = Depends(get_db)
):
    """
    Generate an unused slug from a business name
    """
    if not business_name.strip():
        raise HTTPException(status_code=400, detail="Business name is required")

    return SlugCheckResponse(
        is_available=True,
        suggested_slug=SlugService.get_unique_slug(db, business_name)
    )


# ========== STEP 1: BUSINESS INFO ==========

@router.post("/step1", response_model=OnboardingStatusResponse)
def onboarding_step1(
        request: OnboardingStep1Request,
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Step 1: Create the shop (no X-Tenant-Slug header) or update its profile
    """
    tenant = apply_business_info(db, tenant, request)
    db.commit()
    db.refresh(tenant)

    return build_status(db, tenant)


# ========== STEP 2: AVAILABILITY ==========

@router.post("/step2", response_model=OnboardingStatusResponse)
def onboarding_step2(
        request: OnboardingStep2Request,
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Step 2: Save availability rules
    """
    tenant = apply_availability(db, require_tenant(tenant), request)
    db.commit()
    db.refresh(tenant)

    return build_status(db, tenant)


# ========== STEP 3: FIRST SERVICE ==========

@router.post("/step3", response_model=OnboardingStatusResponse)
def onboarding_step3(
        request: OnboardingStep3Request,
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Step 3: Add the first service item and enable public booking
    """
    tenant = apply_first_service(db, require_tenant(tenant), request)
    db.commit()
    db.refresh(tenant)

    logger.info(f"Tenant {tenant.slug} completed onboarding")
    return build_status(db, tenant)


# ========== ALL STEPS ==========

@router.post("/complete", response_model=OnboardingStatusResponse)
def complete_onboarding(
        request: CompleteOnboardingRequest,
        tenant: Optional[Tenant] = Depends(get_optional_tenant),
        db: Session = Depends(get_db)
):
    """
    Run steps 1-3 in one request; nothing is saved if any step fails
    """
    try:
        tenant = apply_business_info(db, tenant, request.business_info)
        apply_availability(db, tenant, request.availability)
        apply_first_service(db, tenant, request.first_service)
        db.commit()
    except HTTPException:
        db.rollback()
        raise

    db.refresh(tenant)
    logger.info(f"Tenant {tenant.slug} completed onboarding in one request")
    return build_status(db, tenant)
