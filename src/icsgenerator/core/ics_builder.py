"""ICS document assembly."""

import logging
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional

from icsgenerator.config.constants import (
    ALARM_ACTION,
    BUILTIN_VTIMEZONES,
    ICS_CALSCALE,
    ICS_LINE_ENDING,
    ICS_UTC_SUFFIX,
    ICS_VERSION,
)
from icsgenerator.config.settings import GENERATOR_CONFIG, GeneratorConfig
from icsgenerator.core.alarms import AlarmSpec, build_alarms
from icsgenerator.core.expander import Occurrence, expand_event
from icsgenerator.core.formatting import (
    escape_text,
    format_date,
    format_datetime,
    format_utc_timestamp,
)
from icsgenerator.core.models import CalendarDocument, YearRange
from icsgenerator.core.timezone_utils import resolve_timezone, to_utc, to_wall_clock

logger = logging.getLogger(__name__)


def generate_ics(
    document: CalendarDocument,
    year_range: Optional[YearRange],
    now: datetime,
    config: GeneratorConfig = GENERATOR_CONFIG,
) -> str:
    """Build the ICS text for a calendar document.

    Output depends only on the arguments: the same inputs always produce the
    same bytes.

    Args:
        document: The calendar to serialize.
        year_range: Years before/after ``now`` to expand birthdays over.
            None uses the configured default.
        now: Generation time, used for DTSTAMP/CREATED/LAST-MODIFIED and to
            pick the current year. Naive values are taken as UTC.
        config: Generator settings.

    Returns:
        The ICS document, CRLF separated.
    """
    lines = build_calendar_lines(document, year_range, now, config)
    return ICS_LINE_ENDING.join(lines)


def default_year_range(config: GeneratorConfig = GENERATOR_CONFIG) -> YearRange:
    return YearRange(past=config.years_past, future=config.years_future)


def build_calendar_lines(
    document: CalendarDocument,
    year_range: Optional[YearRange],
    now: datetime,
    config: GeneratorConfig = GENERATOR_CONFIG,
) -> List[str]:
    """Build the content lines of the ICS document, without line endings."""
    if year_range is None:
        year_range = default_year_range(config)

    now_utc = to_utc(now)
    start_year, end_year = year_range.window(now_utc.year)
    stamp = format_utc_timestamp(now_utc)
    tzobj, _ = resolve_timezone(document.timezone_id, document.name)

    lines = _build_header(document, config)
    lines.extend(build_timezone_block(document.timezone_id))

    occurrence_count = 0
    for event in document.events:
        for occurrence in expand_event(event, start_year, end_year, config):
            lines.extend(build_vevent(occurrence, document.timezone_id, tzobj, stamp))
            occurrence_count += 1

    lines.append("END:VCALENDAR")

    logger.info(
        "Generated calendar '%s': %d event(s), %d occurrence(s), years %d-%d",
        document.name, len(document.events), occurrence_count, start_year, end_year,
    )
    return lines


def _build_header(document: CalendarDocument, config: GeneratorConfig) -> List[str]:
    lines = [
        "BEGIN:VCALENDAR",
        f"VERSION:{ICS_VERSION}",
        f"PRODID:{config.prodid}",
        f"X-WR-CALNAME:{escape_text(document.name)}",
    ]
    if document.description:
        lines.append(f"X-WR-CALDESC:{escape_text(document.description)}")
    lines.append(f"X-WR-TIMEZONE:{document.timezone_id}")
    lines.append(f"CALSCALE:{ICS_CALSCALE}")
    return lines


def build_timezone_block(timezone_id: str) -> List[str]:
    """Return the VTIMEZONE lines for built-in zones, or nothing.

    Other zones are referenced by TZID only and resolved by the consumer.
    """
    return list(BUILTIN_VTIMEZONES.get(timezone_id, ()))


def build_vevent(occurrence: Occurrence, timezone_id: str, tzobj: tzinfo, stamp: str) -> List[str]:
    """Build the VEVENT lines for one occurrence.

    Args:
        occurrence: The occurrence to serialize.
        timezone_id: TZID written on timed start/end lines.
        tzobj: Zone that aware start/end datetimes are converted into.
        stamp: Preformatted UTC timestamp for DTSTAMP/CREATED/LAST-MODIFIED.
    """
    lines = [
        "BEGIN:VEVENT",
        f"UID:{occurrence.uid}",
        f"DTSTAMP:{stamp}",
        f"CREATED:{stamp}",
        f"LAST-MODIFIED:{stamp}",
        f"SUMMARY:{escape_text(occurrence.summary)}",
    ]
    if occurrence.description:
        lines.append(f"DESCRIPTION:{escape_text(occurrence.description)}")
    if occurrence.location:
        lines.append(f"LOCATION:{escape_text(occurrence.location)}")

    if occurrence.all_day:
        lines.append(f"DTSTART;VALUE=DATE:{format_date(occurrence.start)}")
        if occurrence.end is not None:
            # DTEND is exclusive for all-day events
            lines.append(f"DTEND;VALUE=DATE:{format_date(occurrence.end + timedelta(days=1))}")
    else:
        lines.append(f"DTSTART;TZID={timezone_id}:{_format_local(occurrence.start, tzobj)}")
        if occurrence.end is not None:
            lines.append(f"DTEND;TZID={timezone_id}:{_format_local(occurrence.end, tzobj)}")

    if occurrence.rrule:
        lines.append(f"RRULE:{occurrence.rrule}")

    for alarm in build_alarms(occurrence.reminders, occurrence.summary, occurrence.all_day):
        lines.extend(build_valarm(alarm))

    lines.append("END:VEVENT")
    return lines


def build_valarm(alarm: AlarmSpec) -> List[str]:
    return [
        "BEGIN:VALARM",
        f"ACTION:{ALARM_ACTION}",
        f"DESCRIPTION:{escape_text(alarm.description)}",
        f"TRIGGER:{alarm.trigger}",
        "END:VALARM",
    ]


def _format_local(value, tzobj: tzinfo) -> str:
    # Trailing Z next to TZID is kept for compatibility with existing consumers
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return format_datetime(to_wall_clock(value, tzobj)) + ICS_UTC_SUFFIX
