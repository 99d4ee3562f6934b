# ===== app/services/availability/slot_generator.py =====
"""
Bookable time-slot generation for a single day.

Pure computation: takes the day, the service being booked, the tenant's
availability rules, the tenant's appointments and the current time, and
returns the ordered list of open windows. Nothing here touches the database.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple, Union
import logging

from app.core.exceptions import InvalidRangeError
from app.schemas.availability import AvailabilityRules, BreakPeriod, DaySchedule, Weekday
from app.schemas.booking import TimeSlot
from app.utils.time_utils import parse_time, combine

logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIME = "08:00"
DEFAULT_CLOSE_TIME = "17:00"

# Existing appointments block this long regardless of their booked service
APPOINTMENT_BLOCK_MINUTES = 60


@dataclass(frozen=True)
class DayWindow:
    """Resolved operating hours for one calendar day"""
    open_time: time
    close_time: time
    breaks: Tuple[BreakPeriod, ...] = ()


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open interval overlap: [start, end) vs [other_start, other_end)"""
    return other_start < end and other_end > start


def resolve_day_window(day: date, rules: AvailabilityRules) -> Optional[DayWindow]:
    """
    Work out the operating window for a day, or None when the shop is closed.

    Closed when the weekday has no open schedule or the date is listed in
    closed_dates. An open special date replaces the weekday hours; a closed
    special date does not close the day here (the calendar view handles it).
    Breaks always come from the weekday schedule.
    """
    schedule: Optional[DaySchedule] = rules.day_schedule(Weekday.from_index(day.weekday()))
    if schedule is None or not schedule.is_open:
        return None

    date_str = day.isoformat()
    if date_str in rules.closed_dates:
        return None

    open_time = parse_time(schedule.open_time, DEFAULT_OPEN_TIME)
    close_time = parse_time(schedule.close_time, DEFAULT_CLOSE_TIME)

    special = rules.special_dates.get(date_str)
    if special is not None and special.is_open:
        open_time = parse_time(special.open_time, DEFAULT_OPEN_TIME)
        close_time = parse_time(special.close_time, DEFAULT_CLOSE_TIME)

    return DayWindow(open_time, close_time, tuple(schedule.breaks or ()))


def _duration_of(service) -> int:
    if isinstance(service, int):
        return service
    return service.duration_minutes


def generate_time_slots(
        day: Union[date, datetime],
        service,
        rules: AvailabilityRules,
        existing_appointments: Iterable,
        now: datetime
) -> List[TimeSlot]:
    """
    Generate the available slots for one day.

    Args:
        day: Calendar day (a datetime's time part is ignored)
        service: Object with duration_minutes (ServiceItem) or a duration in minutes
        rules: Tenant availability rules, never modified
        existing_appointments: Objects with scheduled_date; each blocks 60 minutes
        now: Current naive local time used for the advance-booking bounds

    Returns:
        Chronological list of TimeSlot; empty when nothing is bookable

    Raises:
        InvalidRangeError: non-positive service duration or slot step
        TimeFormatError: malformed HH:mm in the rules
    """
    if isinstance(day, datetime):
        day = day.date()

    duration_minutes = _duration_of(service)
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidRangeError("Service duration must be a positive number of minutes")

    if rules.slot_duration_minutes <= 0:
        raise InvalidRangeError("Slot duration must be a positive number of minutes")
    step_minutes = rules.slot_duration_minutes + rules.buffer_minutes

    window = resolve_day_window(day, rules)
    if window is None:
        return []

    # Parse everything up front so a bad break time fails before any output
    break_windows = [
        (combine(day, parse_time(b.start_time)), combine(day, parse_time(b.end_time)))
        for b in window.breaks
    ]

    # Snapshot of appointment start times; the caller's list is left untouched
    appointment_starts = [a.scheduled_date for a in existing_appointments]
    block = timedelta(minutes=APPOINTMENT_BLOCK_MINUTES)

    service_duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=step_minutes)
    earliest = now + timedelta(hours=rules.min_advance_booking_hours)
    latest = now + timedelta(days=rules.max_advance_booking_days)

    current = combine(day, window.open_time)
    day_close = combine(day, window.close_time)

    slots: List[TimeSlot] = []
    while current + service_duration <= day_close:
        slot_end = current + service_duration

        if current > latest:
            break

        too_soon = current < earliest
        has_conflict = any(overlaps(current, slot_end, start, start + block) for start in appointment_starts)
        in_break = any(overlaps(current, slot_end, start, end) for start, end in break_windows)

        if not (too_soon or has_conflict or in_break):
            slots.append(TimeSlot(start_time=current, end_time=slot_end, is_available=True))

        current += step

    logger.debug(f"Generated {len(slots)} slots for {day.isoformat()} ({duration_minutes} min service)")
    return slots
