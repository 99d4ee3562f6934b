# app/core/exceptions.py
"""Domain errors raised by the booking core and translated to HTTP by the routers"""


class BookingError(Exception):
    """Base class for booking/availability errors"""

    pass


class AvailabilityRulesError(BookingError):
    """Raised when availability configuration is invalid or cannot be parsed"""

    pass


class TimeFormatError(AvailabilityRulesError):
    """Raised when a time of day is not in strict HH:mm format"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time format '{value}'. Use HH:mm (e.g., 08:00)")


class InvalidRangeError(BookingError):
    """Raised for out-of-range inputs (month, year, non-positive durations)"""

    pass


class SlotUnavailableError(BookingError):
    """Raised when a requested booking start is not an offered slot"""

    pass
