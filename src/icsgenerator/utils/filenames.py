"""File naming for generated calendars."""

import re

_WHITESPACE = re.compile(r"\s+")


def calendar_filename(name: str) -> str:
    """Return the download filename for a calendar, e.g. "Family Birthdays" -> "Family_Birthdays.ics"."""
    return f"{_WHITESPACE.sub('_', name)}.ics"
