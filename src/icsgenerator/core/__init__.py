"""Core business logic for the ICS calendar generator."""

from icsgenerator.core.ics_builder import generate_ics
from icsgenerator.core.lunar_converter import (
    get_birthday_in_solar_year,
    lunar_to_solar,
    solar_to_lunar,
)
from icsgenerator.core.models import (
    BirthdayEvent,
    CalendarDocument,
    CalendarType,
    EventBase,
    Frequency,
    LunarDate,
    Recurrence,
    RegularEvent,
    Reminder,
    ReminderUnit,
    YearRange,
)
from icsgenerator.core.recurrence import build_rrule

__all__ = [
    "generate_ics",
    "get_birthday_in_solar_year",
    "lunar_to_solar",
    "solar_to_lunar",
    "BirthdayEvent",
    "CalendarDocument",
    "CalendarType",
    "EventBase",
    "Frequency",
    "LunarDate",
    "Recurrence",
    "RegularEvent",
    "Reminder",
    "ReminderUnit",
    "YearRange",
    "build_rrule",
]
