"""Reminder shorthand parsing and display."""

from typing import Optional

from icsgenerator.config.constants import REMINDER_SHORTHAND_PATTERN, REMINDER_SHORTHAND_UNITS
from icsgenerator.core.models import Reminder, ReminderUnit

# Display units for format_reminder
UNIT_DISPLAY = {
    ReminderUnit.WEEKS.value: "周",
    ReminderUnit.DAYS.value: "天",
    ReminderUnit.HOURS.value: "小时",
    ReminderUnit.MINUTES.value: "分钟",
}

AT_EVENT_TIME = "事件发生时"


def parse_reminder_string(reminder_str: Optional[str]) -> Optional[Reminder]:
    """Parse shorthand like "1w", "3d", "2h", "30m" or "0" into a Reminder.

    A bare number is taken as minutes.

    Args:
        reminder_str: The shorthand string.

    Returns:
        The Reminder, or None if the string is not recognized.
    """
    if not reminder_str:
        return None

    s = reminder_str.strip().lower()
    if not s:
        return None

    if s.isdecimal():
        return Reminder(value=int(s), unit=ReminderUnit.MINUTES)

    match = REMINDER_SHORTHAND_PATTERN.match(s)
    if match:
        value, unit_char = match.groups()
        return Reminder(value=int(value), unit=ReminderUnit(REMINDER_SHORTHAND_UNITS[unit_char]))

    return None


def format_reminder(reminder: Reminder) -> str:
    """Format a reminder for display, e.g. "提前3天"."""
    if reminder.value == 0:
        return AT_EVENT_TIME
    return f"提前{reminder.value}{UNIT_DISPLAY[ReminderUnit(reminder.unit).value]}"
