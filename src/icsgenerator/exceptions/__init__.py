"""Custom exceptions for the ICS calendar generator."""

from icsgenerator.exceptions.errors import (
    CalendarGeneratorError,
    EventValidationError,
    DocumentValidationError,
    TimezoneResolutionError,
)

__all__ = [
    "CalendarGeneratorError",
    "EventValidationError",
    "DocumentValidationError",
    "TimezoneResolutionError",
]
