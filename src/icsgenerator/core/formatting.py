"""Text escaping and date/time formatting for ICS output."""

from datetime import date, datetime
from typing import Optional

from icsgenerator.config.constants import ICS_UTC_SUFFIX
from icsgenerator.core.timezone_utils import to_utc

# Backslash first so later replacements don't double-escape
_ESCAPES = (
    ("\\", "\\\\"),
    (";", "\\;"),
    (",", "\\,"),
    ("\n", "\\n"),
    ("\r", "\\r"),
)


def escape_text(text: Optional[str]) -> str:
    """Escape a free-text value for use in a content line."""
    if not text:
        return ""
    escaped = str(text)
    for char, replacement in _ESCAPES:
        escaped = escaped.replace(char, replacement)
    return escaped


def format_date(value: date) -> str:
    """Format a date as YYYYMMDD."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_datetime(value: datetime) -> str:
    """Format a datetime's own wall-clock fields as YYYYMMDDTHHMMSS."""
    return (
        f"{format_date(value)}T"
        f"{value.hour:02d}{value.minute:02d}{value.second:02d}"
    )


def format_utc_timestamp(value) -> str:
    """Format a moment as YYYYMMDDTHHMMSSZ in UTC, second precision.

    Plain dates are taken as midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return format_datetime(to_utc(value)) + ICS_UTC_SUFFIX
