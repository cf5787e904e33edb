"""Utility functions for the ICS calendar generator."""

from icsgenerator.utils.filenames import calendar_filename
from icsgenerator.utils.lunar_names import (
    format_lunar_date,
    get_chinese_zodiac,
    get_lunar_day_name,
    get_lunar_month_name,
)
from icsgenerator.utils.reminders import format_reminder, parse_reminder_string

__all__ = [
    "calendar_filename",
    "format_lunar_date",
    "get_chinese_zodiac",
    "get_lunar_day_name",
    "get_lunar_month_name",
    "format_reminder",
    "parse_reminder_string",
]
