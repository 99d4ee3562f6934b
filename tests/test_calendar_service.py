from datetime import date, datetime

import pytest

from app.core.exceptions import InvalidRangeError
from app.schemas.availability import AvailabilityRules, DaySchedule
from app.services.availability.calendar_service import (
    REASON_CLOSED,
    REASON_HOLIDAY,
    REASON_SPECIAL_DATE,
    build_calendar_month,
    day_status,
)

RULES = AvailabilityRules(min_advance_booking_hours=0, max_advance_booking_days=90)


def days_by_date(calendar_month):
    return {d.date: d for d in calendar_month.days}


@pytest.mark.parametrize("year,month,expected", [
    (2025, 2, 28),
    (2024, 2, 29),
    (2025, 4, 30),
    (2025, 12, 31),
])
def test_month_has_one_entry_per_day(year, month, expected):
    result = build_calendar_month(year, month, None, RULES, now=datetime(2024, 1, 1))

    assert len(result.days) == expected
    assert [d.day_of_month for d in result.days] == list(range(1, expected + 1))


def test_sundays_are_closed_with_zero_slots():
    result = build_calendar_month(2025, 12, None, RULES, service=60, now=datetime(2025, 11, 20, 9, 0))

    sundays = [d for d in result.days if d.day_of_week == "Sunday"]
    assert [d.date.day for d in sundays] == [7, 14, 21, 28]
    for day in sundays:
        assert day.is_open is False
        assert day.reason == REASON_CLOSED
        assert day.available_slots == 0
        assert day.has_availability is False

    monday = days_by_date(result)[date(2025, 12, 1)]
    assert monday.is_open is True
    assert monday.reason is None
    assert monday.available_slots == 17
    assert monday.has_availability is True

    assert result.month_name == "December"


def test_holiday_and_special_date_reasons():
    rules = RULES.model_copy(update={
        "closed_dates": ["2025-12-25"],
        "special_dates": {
            "2025-12-24": DaySchedule(is_open=False),
            "2025-12-14": DaySchedule(is_open=True, open_time="10:00", close_time="14:00"),
        },
    })

    result = days_by_date(build_calendar_month(2025, 12, None, rules, now=datetime(2025, 11, 20)))

    assert result[date(2025, 12, 25)].reason == REASON_HOLIDAY
    assert result[date(2025, 12, 24)].is_open is False
    assert result[date(2025, 12, 24)].reason == REASON_SPECIAL_DATE
    assert result[date(2025, 12, 14)].is_open is True
    assert result[date(2025, 12, 14)].reason is None


def test_closed_date_takes_precedence_over_special_date():
    rules = RULES.model_copy(update={
        "closed_dates": ["2025-12-26"],
        "special_dates": {"2025-12-26": DaySchedule(is_open=True)},
    })

    assert day_status(date(2025, 12, 26), rules) == (False, REASON_HOLIDAY)


def test_past_days_report_no_availability():
    result = build_calendar_month(2025, 12, None, RULES, service=60, now=datetime(2025, 12, 10, 7, 0))
    days = days_by_date(result)

    for day_number in range(1, 10):
        day = days[date(2025, 12, day_number)]
        assert day.is_past is True
        assert day.available_slots == 0

    today = days[date(2025, 12, 10)]
    assert today.is_today is True
    assert today.is_past is False
    assert today.available_slots > 0


def test_without_service_every_day_has_zero_slots():
    result = build_calendar_month(2025, 12, None, RULES, now=datetime(2025, 11, 20))

    assert all(d.available_slots == 0 and not d.has_availability for d in result.days)
    assert any(d.is_open for d in result.days)


@pytest.mark.parametrize("year,month", [(2025, 0), (2025, 13), (0, 5), (10000, 1)])
def test_out_of_range_month_or_year_is_rejected(year, month):
    with pytest.raises(InvalidRangeError):
        build_calendar_month(year, month, None, RULES)
