# ============================================================================
# FILE: app/api/v1/public/booking.py
# Public booking page endpoints - no authentication
# ============================================================================
from datetime import date, datetime, timedelta
from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.exceptions import AvailabilityRulesError, InvalidRangeError, SlotUnavailableError
from app.models.service_item import ServiceItem
from app.models.tenant import Tenant
from app.schemas.availability import AvailabilityRules
from app.schemas.booking import (
    AvailableTimeSlotsResponse,
    BookingPageResponse,
    CalendarMonth,
    PublicBookingRequest,
    PublicBookingResponse,
    PublicServiceResponse,
)
from app.services.appointment.appointment_service import AppointmentService
from app.services.availability.availability_service import AvailabilityService
from app.services.tenant.tenant_service import TenantService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/book", tags=["public-booking"])


# ============================================================================
# Helper Functions
# ============================================================================

def _get_booking_tenant(db: Session, slug: str) -> Tenant:
    """Tenant with booking enabled, or 404"""
    tenant = TenantService.get_tenant_by_slug(db, slug)
    if tenant is None or not tenant.booking_enabled:
        raise HTTPException(status_code=404, detail="Booking page not found")
    return tenant


def _load_rules(tenant: Tenant) -> AvailabilityRules:
    """Parsed rules, or 400 when missing or unreadable"""
    try:
        rules = tenant.get_availability_rules()
    except AvailabilityRulesError as e:
        logger.error(f"Tenant {tenant.slug} has unreadable availability rules: {e}")
        raise HTTPException(status_code=400, detail="Invalid availability rules")

    if rules is None:
        raise HTTPException(status_code=400, detail="Availability rules not configured")
    return rules


def _get_bookable_service(db: Session, tenant: Tenant, service_id: int) -> ServiceItem:
    service = TenantService.get_bookable_service(db, tenant.id, service_id)
    if service is None:
        raise HTTPException(status_code=400, detail="Service not found or not available for booking")
    return service


def _service_to_response(service: ServiceItem) -> PublicServiceResponse:
    return PublicServiceResponse(
        id=service.id,
        name=service.name,
        description=service.description,
        base_price=float(service.base_price or 0),
        formatted_price=service.formatted_price,
        duration_minutes=service.duration_minutes,
        formatted_duration=service.formatted_duration,
        category=service.category.value
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.get("/{slug}", response_model=BookingPageResponse)
def get_booking_page(
        slug: str = Path(..., description="Tenant slug"),
        db: Session = Depends(get_db)
):
    """
    Public booking page information for a shop
    """
    tenant = TenantService.get_tenant_by_slug(db, slug)
    if tenant is None:
        raise HTTPException(status_code=404, detail="Booking page not found")

    if not tenant.booking_enabled or not tenant.onboarding_completed:
        raise HTTPException(status_code=400, detail="Booking is not enabled for this business")

    try:
        rules = tenant.get_availability_rules()
    except AvailabilityRulesError as e:
        logger.error(f"Tenant {tenant.slug} has unreadable availability rules: {e}")
        rules = None

    services = TenantService.get_bookable_services(db, tenant.id)

    return BookingPageResponse(
        business_name=tenant.name,
        slug=tenant.slug,
        description=tenant.description,
        address=tenant.full_address,
        phone=tenant.phone,
        email=tenant.email,
        website=tenant.website,
        logo_url=tenant.logo_url,
        services=[_service_to_response(s) for s in services],
        availability_rules=rules,
        timezone=rules.timezone if rules else (tenant.timezone or "America/Chicago")
    )


@router.get("/{slug}/availability", response_model=AvailableTimeSlotsResponse)
def get_available_time_slots(
        slug: str = Path(..., description="Tenant slug"),
        day: date = Query(..., alias="date", description="Day to check (YYYY-MM-DD)"),
        service_id: int = Query(..., description="Service item to book"),
        db: Session = Depends(get_db)
):
    """
    Available time slots for a specific date and service
    """
    tenant = _get_booking_tenant(db, slug)
    service = _get_bookable_service(db, tenant, service_id)
    rules = _load_rules(tenant)

    try:
        slots = AvailabilityService.get_available_slots(db, tenant, service, day, rules, datetime.now())
    except (AvailabilityRulesError, InvalidRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AvailableTimeSlotsResponse(
        date=day,
        service_id=service.id,
        service_name=service.name,
        duration_minutes=service.duration_minutes,
        available_slots=slots
    )


@router.get("/{slug}/calendar", response_model=CalendarMonth)
def get_calendar_month(
        slug: str = Path(..., description="Tenant slug"),
        year: int = Query(..., ge=1, le=9999),
        month: int = Query(..., ge=1, le=12),
        service_id: Optional[int] = Query(None, description="Count slots for this service"),
        db: Session = Depends(get_db)
):
    """
    Month calendar with open/closed state and slot counts per day
    """
    tenant = _get_booking_tenant(db, slug)
    rules = _load_rules(tenant)
    service = _get_bookable_service(db, tenant, service_id) if service_id is not None else None

    try:
        return AvailabilityService.get_calendar_month(
            db, tenant, year, month, rules, service=service, now=datetime.now()
        )
    except (AvailabilityRulesError, InvalidRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{slug}/appointments", response_model=PublicBookingResponse, status_code=status.HTTP_201_CREATED)
def create_public_booking(
        booking: PublicBookingRequest,
        slug: str = Path(..., description="Tenant slug"),
        db: Session = Depends(get_db)
):
    """
    Book an available slot from the public booking page

    Rules are read by the booking service under the tenant lock; missing or
    unreadable rules come back as a 400.
    """
    tenant = _get_booking_tenant(db, slug)
    service = _get_bookable_service(db, tenant, booking.service_id)

    try:
        appointment = AppointmentService.request_public_booking(
            db,
            tenant=tenant,
            service=service,
            start_time=booking.start_time,
            customer_name=booking.customer_name,
            customer_phone=booking.customer_phone,
            customer_email=booking.customer_email,
            notes=booking.notes,
            now=datetime.now()
        )
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (AvailabilityRulesError, InvalidRangeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    end_time = appointment.scheduled_date + timedelta(minutes=service.duration_minutes)

    return PublicBookingResponse(
        appointment_id=appointment.id,
        scheduled_date=appointment.scheduled_date,
        end_time=end_time,
        service_name=service.name,
        message="Appointment booked successfully"
    )
