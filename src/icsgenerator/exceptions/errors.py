"""Exception types raised by the ICS calendar generator."""

from typing import Iterable, Optional


class CalendarGeneratorError(Exception):
    """Base class for all generator errors."""


class EventValidationError(CalendarGeneratorError):
    """Raised when an event payload is missing fields or carries invalid values."""

    def __init__(
        self,
        missing_fields: Optional[Iterable[str]] = None,
        event_title: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.missing_fields = set(missing_fields or ())
        self.event_title = event_title or "Unknown"
        if message is None:
            fields = ", ".join(sorted(self.missing_fields))
            message = f"Event '{self.event_title}' is missing required fields: {fields}"
        super().__init__(message)


class DocumentValidationError(CalendarGeneratorError):
    """Raised when a calendar document payload cannot be loaded."""


class TimezoneResolutionError(CalendarGeneratorError):
    """Raised when a timezone identifier cannot be resolved."""

    def __init__(self, tz_id: str):
        self.tz_id = tz_id
        super().__init__(f"Unknown timezone '{tz_id}'")
