# app/schemas/__init__.py
from .availability import (
    Weekday,
    BreakPeriod,
    DaySchedule,
    AvailabilityRules,
    validate_availability_rules,
)

from .booking import (
    TimeSlot,
    CalendarDay,
    CalendarMonth,
    AvailableTimeSlotsResponse,
    BookingPageResponse,
    PublicBookingRequest,
    PublicBookingResponse,
)

__all__ = [
    "Weekday",
    "BreakPeriod",
    "DaySchedule",
    "AvailabilityRules",
    "validate_availability_rules",
    "TimeSlot",
    "CalendarDay",
    "CalendarMonth",
    "AvailableTimeSlotsResponse",
    "BookingPageResponse",
    "PublicBookingRequest",
    "PublicBookingResponse",
]
