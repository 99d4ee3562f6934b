"""
Pydantic schemas for tenant availability rules

AvailabilityRules is stored as JSON on the tenant row and parsed once at the
store boundary (Tenant.get_availability_rules); everything downstream works
with the typed model.
"""
import enum
import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from app.core.exceptions import AvailabilityRulesError
from app.utils.time_utils import is_valid_time

CURRENT_SCHEMA_VERSION = 1


class Weekday(str, enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """0=Monday, 6=Sunday (same as date.weekday())"""
        return list(cls)[index]


class CamelModel(BaseModel):
    """Base for JSON shapes that use camelCase keys but snake_case attributes"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BreakPeriod(CamelModel):
    start_time: str = ""  # HH:mm
    end_time: str = ""  # HH:mm


class DaySchedule(CamelModel):
    is_open: bool = False
    open_time: Optional[str] = None  # HH:mm, defaults to 08:00 when open
    close_time: Optional[str] = None  # HH:mm, defaults to 17:00 when open
    breaks: Optional[List[BreakPeriod]] = None


def default_weekly_schedule() -> Dict[Weekday, Optional[DaySchedule]]:
    weekday_hours = dict(is_open=True, open_time="08:00", close_time="17:00")
    return {
        Weekday.MONDAY: DaySchedule(**weekday_hours),
        Weekday.TUESDAY: DaySchedule(**weekday_hours),
        Weekday.WEDNESDAY: DaySchedule(**weekday_hours),
        Weekday.THURSDAY: DaySchedule(**weekday_hours),
        Weekday.FRIDAY: DaySchedule(**weekday_hours),
        Weekday.SATURDAY: DaySchedule(is_open=True, open_time="09:00", close_time="13:00"),
        Weekday.SUNDAY: DaySchedule(is_open=False),
    }


class AvailabilityRules(CamelModel):
    """Per-tenant booking availability configuration"""

    schema_version: int = CURRENT_SCHEMA_VERSION

    # Advisory only; slot math runs in naive local time
    timezone: str = "America/Chicago"

    weekly_schedule: Dict[Weekday, Optional[DaySchedule]] = Field(default_factory=default_weekly_schedule)

    slot_duration_minutes: int = 30
    buffer_minutes: int = Field(default=0, ge=0)
    max_advance_booking_days: int = 30
    min_advance_booking_hours: int = 2

    # ISO dates ("2025-12-25") closed regardless of weekly schedule
    closed_dates: List[str] = Field(default_factory=list)

    # ISO date -> custom hours for that day
    special_dates: Dict[str, DaySchedule] = Field(default_factory=dict)

    @field_validator("weekly_schedule", mode="before")
    @classmethod
    def normalize_weekday_keys(cls, v):
        """Accept 'monday', 'MONDAY' or 0-6 as weekday keys"""
        if not isinstance(v, dict):
            return v
        normalized = {}
        for key, value in v.items():
            if isinstance(key, int) and 0 <= key <= 6:
                key = Weekday.from_index(key).value
            elif isinstance(key, str) and key.isdigit() and 0 <= int(key) <= 6:
                key = Weekday.from_index(int(key)).value
            elif isinstance(key, str):
                key = key.strip().capitalize()
            normalized[key] = value
        return normalized

    def day_schedule(self, weekday: Weekday) -> Optional[DaySchedule]:
        return self.weekly_schedule.get(weekday)

    @classmethod
    def from_storage(cls, blob: Union[str, Dict[str, Any], None]) -> Optional["AvailabilityRules"]:
        """
        Parse the JSON blob stored on a tenant.

        Returns None when nothing is stored. Blobs written before versioning
        (no schemaVersion key) are read as version 1.

        Raises:
            AvailabilityRulesError: malformed blob or unsupported schema version
        """
        if blob is None or blob == "":
            return None

        if isinstance(blob, str):
            try:
                blob = json.loads(blob)
            except json.JSONDecodeError as e:
                raise AvailabilityRulesError(f"Stored availability rules are not valid JSON: {e}")

        if not isinstance(blob, dict):
            raise AvailabilityRulesError("Stored availability rules must be a JSON object")

        version = blob.get("schemaVersion", blob.get("schema_version", 1))
        if version != CURRENT_SCHEMA_VERSION:
            raise AvailabilityRulesError(f"Unsupported availability rules schema version: {version}")

        try:
            return cls.model_validate(blob)
        except ValidationError as e:
            raise AvailabilityRulesError(f"Invalid availability rules: {e.errors()[0]['msg']}")

    def to_storage(self) -> Dict[str, Any]:
        """JSON-ready dict written to the tenant row"""
        data = self.model_dump(mode="json", by_alias=True)
        data["schemaVersion"] = CURRENT_SCHEMA_VERSION
        return data


def validate_availability_rules(rules: AvailabilityRules) -> None:
    """
    Check rules before they are persisted.

    Raises AvailabilityRulesError with a user-facing message on the first
    violation; callers must not persist anything in that case.
    """
    if rules.slot_duration_minutes < 15 or rules.slot_duration_minutes > 240:
        raise AvailabilityRulesError("Slot duration must be between 15 and 240 minutes")

    if rules.max_advance_booking_days < 1 or rules.max_advance_booking_days > 365:
        raise AvailabilityRulesError("Max advance booking must be between 1 and 365 days")

    if rules.min_advance_booking_hours < 0 or rules.min_advance_booking_hours > 168:
        raise AvailabilityRulesError("Min advance booking must be between 0 and 168 hours (1 week)")

    for schedule in rules.weekly_schedule.values():
        if schedule is None or not schedule.is_open:
            continue

        if not is_valid_time(schedule.open_time) or not is_valid_time(schedule.close_time):
            raise AvailabilityRulesError("Invalid time format. Use HH:mm (e.g., 08:00)")
