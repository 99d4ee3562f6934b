# ===== app/services/availability/calendar_service.py =====
"""Month view for the booking calendar widget"""
import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Tuple
import logging

from app.core.exceptions import InvalidRangeError
from app.schemas.availability import AvailabilityRules, Weekday
from app.schemas.booking import CalendarDay, CalendarMonth
from app.services.availability.slot_generator import generate_time_slots

logger = logging.getLogger(__name__)

REASON_CLOSED = "Closed"
REASON_HOLIDAY = "Closed - Holiday"
REASON_SPECIAL_DATE = "Closed - Special Date"


def day_status(day: date, rules: AvailabilityRules) -> Tuple[bool, Optional[str]]:
    """
    Open/closed state of a day for display, with the reason when closed.

    Precedence: closed_dates, then special_dates, then the weekly schedule.
    """
    date_str = day.isoformat()

    if date_str in rules.closed_dates:
        return False, REASON_HOLIDAY

    special = rules.special_dates.get(date_str)
    if special is not None:
        return (True, None) if special.is_open else (False, REASON_SPECIAL_DATE)

    schedule = rules.day_schedule(Weekday.from_index(day.weekday()))
    if schedule is not None and schedule.is_open:
        return True, None

    return False, REASON_CLOSED


def build_calendar_month(
        year: int,
        month: int,
        tenant,
        rules: AvailabilityRules,
        service=None,
        appointments: Iterable = (),
        now: Optional[datetime] = None
) -> CalendarMonth:
    """
    Build the per-day availability summary for a month.

    Slot counts are only computed for open, non-past days when a service is
    given; every other day reports zero availability.

    Raises:
        InvalidRangeError: month outside 1-12 or year outside 1-9999
    """
    if not 1 <= month <= 12:
        raise InvalidRangeError("Month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise InvalidRangeError("Year must be between 1 and 9999")

    now = now or datetime.now()
    today = now.date()
    appointments = list(appointments)

    _, days_in_month = calendar.monthrange(year, month)
    first_day = date(year, month, 1)

    days = []
    for offset in range(days_in_month):
        current = first_day + timedelta(days=offset)
        is_open, reason = day_status(current, rules)
        is_past = current < today

        available_slots = 0
        if is_open and service is not None and not is_past:
            available_slots = len(generate_time_slots(current, service, rules, appointments, now))

        days.append(CalendarDay(
            date=current,
            day_of_month=current.day,
            day_of_week=Weekday.from_index(current.weekday()).value,
            is_open=is_open,
            is_today=current == today,
            is_past=is_past,
            has_availability=available_slots > 0,
            available_slots=available_slots,
            reason=reason
        ))

    logger.info(
        f"Built calendar {year}-{month:02d} for tenant {getattr(tenant, 'slug', tenant)}: "
        f"{sum(1 for d in days if d.has_availability)} days with availability"
    )

    return CalendarMonth(
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        days=days
    )
