"""ICS Calendar Generator - solar and lunar birthday calendars as .ics files.

Turns a calendar document (name, timezone, birthdays and regular events)
into RFC5545 text. Lunar birthdays are resolved to Gregorian dates year by
year using a built-in lunar table covering 1900-2100.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from icsgenerator.config.settings import GENERATOR_CONFIG, GeneratorConfig, load_config
from icsgenerator.exceptions.errors import (
    CalendarGeneratorError,
    DocumentValidationError,
    EventValidationError,
    TimezoneResolutionError,
)
from icsgenerator.core.ics_builder import generate_ics
from icsgenerator.core.lunar_converter import (
    get_birthday_in_solar_year,
    lunar_to_solar,
    solar_to_lunar,
)
from icsgenerator.core.models import (
    BirthdayEvent,
    CalendarDate,
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

__all__ = [
    # Version
    "__version__",
    # Config
    "GENERATOR_CONFIG",
    "GeneratorConfig",
    "load_config",
    # Exceptions
    "CalendarGeneratorError",
    "DocumentValidationError",
    "EventValidationError",
    "TimezoneResolutionError",
    # Core
    "generate_ics",
    "get_birthday_in_solar_year",
    "lunar_to_solar",
    "solar_to_lunar",
    # Models
    "BirthdayEvent",
    "CalendarDate",
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
]
