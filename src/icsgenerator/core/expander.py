"""Expansion of events into concrete calendar occurrences.

Birthdays become one all-day occurrence per year of the requested window.
Regular events pass through as a single occurrence whose repetition is
carried by its RRULE.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from icsgenerator.config.settings import GENERATOR_CONFIG, GeneratorConfig
from icsgenerator.core.lunar_converter import get_birthday_in_solar_year
from icsgenerator.core.models import BirthdayEvent, Event, EventKind, RegularEvent, Reminder
from icsgenerator.core.recurrence import build_rrule

logger = logging.getLogger(__name__)


@dataclass
class Occurrence:
    """A single VEVENT worth of data."""

    uid: str
    summary: str
    start: Union[date, datetime]
    all_day: bool
    end: Optional[Union[date, datetime]] = None
    description: Optional[str] = None
    location: Optional[str] = None
    reminders: Sequence[Reminder] = ()
    rrule: Optional[str] = None


def resolve_birthday_date(event: BirthdayEvent, year: int) -> Optional[date]:
    """Return the Gregorian date of ``event`` in ``year``, or None to skip the year."""
    birth = event.birth_date

    if event.is_lunar:
        return get_birthday_in_solar_year(birth.year, birth.month, birth.day, year)

    if birth.month == 2 and birth.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return date(year, birth.month, birth.day)


def birthday_summary(event: BirthdayEvent, age: int, config: GeneratorConfig = GENERATOR_CONFIG) -> str:
    summary = f"{event.person_name}{config.birthday_suffix}"
    if event.show_age:
        summary += config.age_format.format(age=age)
    return summary


def expand_birthday(
    event: BirthdayEvent,
    start_year: int,
    end_year: int,
    config: GeneratorConfig = GENERATOR_CONFIG,
) -> List[Occurrence]:
    """Expand a birthday over the inclusive year window.

    Years where a lunar birthday has no Gregorian date are skipped.
    """
    description = event.base.description or config.birthday_description_format.format(
        name=event.person_name
    )

    occurrences = []
    for year in range(start_year, end_year + 1):
        event_date = resolve_birthday_date(event, year)
        if event_date is None:
            logger.debug("Skipping %s birthday in %d: no matching date", event.person_name, year)
            continue

        age = year - event.birth_date.year
        occurrences.append(Occurrence(
            uid=f"{event.id}-{year}",
            summary=birthday_summary(event, age, config),
            start=event_date,
            all_day=True,
            description=description,
            location=event.base.location,
            reminders=event.base.reminders,
        ))

    return occurrences


def expand_regular(event: RegularEvent) -> List[Occurrence]:
    """Wrap a regular event as its single occurrence."""
    start, end = event.start_date, event.end_date
    if event.all_day:
        start = _as_date(start)
        end = _as_date(end) if end is not None else None

    return [Occurrence(
        uid=event.id,
        summary=event.base.summary,
        start=start,
        end=end,
        all_day=event.all_day,
        description=event.base.description,
        location=event.base.location,
        reminders=event.base.reminders,
        rrule=build_rrule(event.recurrence),
    )]


def expand_event(
    event: Event,
    start_year: int,
    end_year: int,
    config: GeneratorConfig = GENERATOR_CONFIG,
) -> List[Occurrence]:
    """Dispatch on the event kind."""
    if event.kind is EventKind.BIRTHDAY:
        occurrences = expand_birthday(event, start_year, end_year, config)
    else:
        occurrences = expand_regular(event)
    logger.debug("Event %s expanded to %d occurrence(s)", event.id, len(occurrences))
    return occurrences


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
