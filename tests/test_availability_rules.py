import json
from datetime import time

import pytest

from app.core.exceptions import AvailabilityRulesError, TimeFormatError
from app.schemas.availability import (
    CURRENT_SCHEMA_VERSION,
    AvailabilityRules,
    DaySchedule,
    Weekday,
    validate_availability_rules,
)
from app.utils.time_utils import is_valid_time, parse_time


class TestValidation:

    def test_defaults_are_valid(self):
        validate_availability_rules(AvailabilityRules())

    @pytest.mark.parametrize("field,value,message", [
        ("slot_duration_minutes", 10, "Slot duration must be between 15 and 240 minutes"),
        ("slot_duration_minutes", 241, "Slot duration must be between 15 and 240 minutes"),
        ("max_advance_booking_days", 0, "Max advance booking must be between 1 and 365 days"),
        ("max_advance_booking_days", 366, "Max advance booking must be between 1 and 365 days"),
        ("min_advance_booking_hours", -1, "Min advance booking must be between 0 and 168 hours (1 week)"),
        ("min_advance_booking_hours", 169, "Min advance booking must be between 0 and 168 hours (1 week)"),
    ])
    def test_out_of_range_values(self, field, value, message):
        rules = AvailabilityRules(**{field: value})

        with pytest.raises(AvailabilityRulesError) as exc_info:
            validate_availability_rules(rules)

        assert str(exc_info.value) == message

    def test_bad_time_on_open_day(self):
        rules = AvailabilityRules(weekly_schedule={
            Weekday.TUESDAY: DaySchedule(is_open=True, open_time="9am", close_time="17:00")
        })

        with pytest.raises(AvailabilityRulesError) as exc_info:
            validate_availability_rules(rules)

        assert str(exc_info.value) == "Invalid time format. Use HH:mm (e.g., 08:00)"

    def test_trailing_newline_is_not_a_valid_time(self):
        rules = AvailabilityRules(weekly_schedule={
            Weekday.MONDAY: DaySchedule(is_open=True, open_time="08:00\n", close_time="17:00\n")
        })

        with pytest.raises(AvailabilityRulesError) as exc_info:
            validate_availability_rules(rules)

        assert str(exc_info.value) == "Invalid time format. Use HH:mm (e.g., 08:00)"

        with pytest.raises(TimeFormatError):
            parse_time("08:00\n")

    def test_open_day_must_name_its_hours(self):
        rules = AvailabilityRules(weekly_schedule={Weekday.TUESDAY: DaySchedule(is_open=True)})

        with pytest.raises(AvailabilityRulesError):
            validate_availability_rules(rules)

    def test_closed_day_times_are_not_checked(self):
        rules = AvailabilityRules(weekly_schedule={
            Weekday.SUNDAY: DaySchedule(is_open=False, open_time="bogus")
        })

        validate_availability_rules(rules)

    def test_negative_buffer_is_rejected_by_the_model(self):
        with pytest.raises(ValueError):
            AvailabilityRules(buffer_minutes=-5)


class TestWeekdayKeys:

    @pytest.mark.parametrize("key", ["monday", "MONDAY", " Monday ", 0, "0"])
    def test_accepted_spellings(self, key):
        rules = AvailabilityRules.model_validate({"weeklySchedule": {key: {"isOpen": True}}})

        assert list(rules.weekly_schedule) == [Weekday.MONDAY]
        assert rules.day_schedule(Weekday.MONDAY).is_open is True

    def test_missing_day_reads_as_none(self):
        rules = AvailabilityRules.model_validate({"weeklySchedule": {"Friday": {"isOpen": True}}})

        assert rules.day_schedule(Weekday.SATURDAY) is None

    def test_unknown_day_is_rejected(self):
        with pytest.raises(ValueError):
            AvailabilityRules.model_validate({"weeklySchedule": {"Funday": {"isOpen": True}}})


class TestStorage:

    @pytest.mark.parametrize("blob", [None, ""])
    def test_nothing_stored(self, blob):
        assert AvailabilityRules.from_storage(blob) is None

    def test_to_storage_writes_camel_case_and_version(self):
        stored = AvailabilityRules(slot_duration_minutes=45).to_storage()

        assert stored["schemaVersion"] == CURRENT_SCHEMA_VERSION
        assert stored["slotDurationMinutes"] == 45
        assert stored["weeklySchedule"]["Monday"]["openTime"] == "08:00"
        assert stored["weeklySchedule"]["Sunday"]["isOpen"] is False

    def test_reads_back_from_a_json_string(self):
        rules = AvailabilityRules(buffer_minutes=10, closed_dates=["2025-12-25"])

        restored = AvailabilityRules.from_storage(json.dumps(rules.to_storage()))

        assert restored == rules

    def test_unversioned_blob_is_read_as_version_one(self):
        rules = AvailabilityRules.from_storage({"slotDurationMinutes": 20, "timezone": "America/Denver"})

        assert rules.schema_version == 1
        assert rules.slot_duration_minutes == 20
        assert rules.timezone == "America/Denver"

    @pytest.mark.parametrize("blob", [
        "{not json",
        "[1, 2]",
        {"schemaVersion": 2},
        {"slotDurationMinutes": "often"},
    ])
    def test_unreadable_blobs(self, blob):
        with pytest.raises(AvailabilityRulesError):
            AvailabilityRules.from_storage(blob)


class TestTimeParsing:

    @pytest.mark.parametrize("value", ["00:00", "08:05", "23:59"])
    def test_valid(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["24:00", "8:00", "08:60", "0800", "08:00\n", " 08:00", "", None])
    def test_invalid(self, value):
        assert not is_valid_time(value)

    def test_default_only_fills_missing_values(self):
        assert parse_time(None, "08:00") == time(8, 0)
        assert parse_time("", "17:00") == time(17, 0)

        with pytest.raises(TimeFormatError):
            parse_time("25:00", "08:00")
