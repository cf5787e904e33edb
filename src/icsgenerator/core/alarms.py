"""Reminder to VALARM trigger offset computation."""

import logging
from dataclasses import dataclass
from datetime import time
from typing import List, Optional, Sequence, Union

from icsgenerator.config.constants import (
    ALARM_TRIGGER_TEMPLATE,
    MINUTES_PER_DAY,
    REMINDER_TIME_PATTERN,
    REMINDER_UNIT_MINUTES,
)
from icsgenerator.core.models import Reminder, ReminderUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlarmSpec:
    """One VALARM: fire ``minutes_before`` minutes before the event start."""

    minutes_before: int
    description: str

    @property
    def trigger(self) -> str:
        return ALARM_TRIGGER_TEMPLATE.format(minutes=self.minutes_before)


def reminder_to_minutes(reminder: Reminder) -> int:
    """Return the reminder's offset in minutes, ignoring any time of day."""
    return reminder.value * REMINDER_UNIT_MINUTES[ReminderUnit(reminder.unit).value]


def _time_of_day_minutes(value: Union[str, time, None]) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    match = REMINDER_TIME_PATTERN.match(str(value).strip())
    if not match:
        logger.warning("Ignoring malformed reminder time %r", value)
        return None
    hours, minutes = (int(part) for part in match.groups())
    return hours * 60 + minutes


def alarm_offset_minutes(reminder: Reminder, all_day: bool) -> int:
    """Compute how many minutes before the event start an alarm fires.

    For an all-day event with a reminder time, the alarm fires at that
    wall-clock time on the day ``value`` ``unit``s before the event. All-day
    events start at midnight, so the offset is whole days plus the minutes
    from the reminder time to the following midnight.

    Example: 1 day before at 09:00 -> 1440 + (1440 - 540) = 2340 minutes.
    """
    base_minutes = reminder_to_minutes(reminder)
    if not all_day:
        return base_minutes

    time_minutes = _time_of_day_minutes(reminder.time)
    if time_minutes is None:
        return base_minutes

    days_offset = base_minutes // MINUTES_PER_DAY
    return days_offset * MINUTES_PER_DAY + (MINUTES_PER_DAY - time_minutes)


def build_alarms(reminders: Sequence[Reminder], summary: str, all_day: bool) -> List[AlarmSpec]:
    """Return one AlarmSpec per reminder, in declaration order."""
    return [
        AlarmSpec(minutes_before=alarm_offset_minutes(reminder, all_day), description=summary)
        for reminder in reminders
    ]
