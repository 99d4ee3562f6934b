"""
Pydantic schemas for the 3-step onboarding wizard
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, EmailStr

from app.models.service_item import ServiceCategory
from app.schemas.availability import AvailabilityRules


# ============================================================================
# Request Schemas
# ============================================================================

class OnboardingStep1Request(BaseModel):
    """Business information"""
    business_name: str = Field(..., min_length=2, max_length=100)
    slug: Optional[str] = Field(
        None,
        min_length=3,
        max_length=30,
        pattern=r"^[a-z0-9-]+$",
        description="Optional - generated from business_name when omitted"
    )
    business_address: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=20)
    phone: Optional[str] = Field(None, pattern=r"^\+?[\d\s\-().]{7,20}$")
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    description: Optional[str] = None


class OnboardingStep2Request(BaseModel):
    """Availability and hours"""
    availability_rules: AvailabilityRules


class OnboardingStep3Request(BaseModel):
    """First service item"""
    service_name: str = Field(..., min_length=2, max_length=100)
    service_description: Optional[str] = Field(None, max_length=500)
    base_price: Decimal = Field(..., ge=0, le=100000)
    duration_minutes: int = Field(60, ge=15, le=480)
    category: ServiceCategory = ServiceCategory.GENERAL


class CompleteOnboardingRequest(BaseModel):
    """All three steps in one request"""
    business_info: OnboardingStep1Request
    availability: OnboardingStep2Request
    first_service: OnboardingStep3Request


class SlugCheckRequest(BaseModel):
    slug: str = Field(..., min_length=1, max_length=100)


# ============================================================================
# Response Schemas
# ============================================================================

class TenantSummary(BaseModel):
    id: int
    name: str
    slug: str
    booking_enabled: bool
    service_item_count: int


class OnboardingStatusResponse(BaseModel):
    is_completed: bool
    current_step: int
    completed_at: Optional[datetime] = None
    tenant: Optional[TenantSummary] = None
    public_booking_url: Optional[str] = None


class SlugCheckResponse(BaseModel):
    is_available: bool
    message: Optional[str] = None
    suggested_slug: Optional[str] = None
