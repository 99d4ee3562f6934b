# app/utils/time_utils.py
"""Helpers for HH:mm time-of-day strings used by availability rules"""
import re
from datetime import time, datetime, date
from typing import Optional

from app.core.exceptions import TimeFormatError

# Strict 24h "HH:mm" (two-digit hour and minute); always applied with fullmatch
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def is_valid_time(value: Optional[str]) -> bool:
    """True when value is a strict HH:mm string"""
    if not value:
        return False
    return TIME_PATTERN.fullmatch(value) is not None


def parse_time(value: Optional[str], default: Optional[str] = None) -> time:
    """
    Parse an HH:mm string into a time.

    Args:
        value: Time string, may be None/empty when a default is given
        default: Fallback string used only when value is missing

    Raises:
        TimeFormatError: value (or the default) is not strict HH:mm
    """
    if not value:
        if default is None:
            raise TimeFormatError(value)
        value = default

    match = TIME_PATTERN.fullmatch(value)
    if not match:
        raise TimeFormatError(value)

    return time(int(match.group(1)), int(match.group(2)))


def combine(day: date, value: time) -> datetime:
    """Naive local datetime for a time of day on a calendar day"""
    return datetime.combine(day, value)
