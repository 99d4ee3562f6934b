"""
Pydantic schemas for the public booking surface (slots, calendar, booking page)
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, EmailStr

from app.schemas.availability import AvailabilityRules


class TimeSlot(BaseModel):
    start_time: datetime
    end_time: datetime
    is_available: bool = True


class CalendarDay(BaseModel):
    date: date
    day_of_month: int
    day_of_week: str
    is_open: bool
    is_today: bool
    is_past: bool
    has_availability: bool = False
    available_slots: int = 0
    reason: Optional[str] = None  # "Closed", "Closed - Holiday", "Closed - Special Date"


class CalendarMonth(BaseModel):
    year: int
    month: int
    month_name: str
    days: List[CalendarDay] = Field(default_factory=list)


# ============================================================================
# Response Schemas
# ============================================================================

class PublicServiceResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    base_price: float
    formatted_price: str
    duration_minutes: int
    formatted_duration: str
    category: str


class BookingPageResponse(BaseModel):
    business_name: str
    slug: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    services: List[PublicServiceResponse] = Field(default_factory=list)
    availability_rules: Optional[AvailabilityRules] = None
    timezone: str


class AvailableTimeSlotsResponse(BaseModel):
    date: date
    service_id: int
    service_name: str
    duration_minutes: int
    available_slots: List[TimeSlot] = Field(default_factory=list)


# ============================================================================
# Request Schemas
# ============================================================================

class PublicBookingRequest(BaseModel):
    """Customer-submitted booking from the public booking page"""
    service_id: int
    start_time: datetime
    customer_name: str = Field(..., min_length=1, max_length=200)
    customer_phone: str = Field(..., pattern=r"^\+?[\d\s\-().]{7,20}$")
    customer_email: Optional[EmailStr] = None
    notes: Optional[str] = Field(None, max_length=1000)


class PublicBookingResponse(BaseModel):
    success: bool = True
    appointment_id: int
    scheduled_date: datetime
    end_time: datetime
    service_name: str
    message: str
