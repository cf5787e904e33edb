"""Data model for calendar documents and their events.

Events are a tagged union: ``BirthdayEvent`` and ``RegularEvent`` each embed
an ``EventBase`` record with the shared fields and expose a class-level
``kind`` discriminator. The generator never mutates these objects.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import ClassVar, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from dateutil import parser

from icsgenerator.config.constants import (
    CALENDAR_DATE_PATTERN,
    DEFAULT_TIMEZONE,
    REMINDER_TIME_PATTERN,
)
from icsgenerator.core.timezone_utils import resolve_timezone_id
from icsgenerator.exceptions.errors import DocumentValidationError, EventValidationError


class CalendarType(str, Enum):
    SOLAR = "solar"
    LUNAR = "lunar"


class ReminderUnit(str, Enum):
    WEEKS = "weeks"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"


class Frequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class EventKind(str, Enum):
    BIRTHDAY = "birthday"
    EVENT = "event"


class CalendarDate(NamedTuple):
    """A year/month/day triple that is not checked against the Gregorian calendar.

    Lunar birthdays such as month 2 day 30 cannot be stored in ``datetime.date``.
    """

    year: int
    month: int
    day: int

    @classmethod
    def parse(cls, value) -> "CalendarDate":
        """Build a CalendarDate from a date, a (y, m, d) sequence or a 'YYYY-MM-DD' string."""
        if isinstance(value, CalendarDate):
            return value
        if isinstance(value, date):
            return cls(value.year, value.month, value.day)
        if isinstance(value, str):
            match = CALENDAR_DATE_PATTERN.match(value.strip())
            if not match:
                raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
            return cls(*(int(part) for part in match.groups()))
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls(*(int(part) for part in value))
        raise ValueError(f"Cannot interpret {value!r} as a calendar date")


@dataclass(frozen=True)
class LunarDate:
    """A date in the Chinese lunar calendar."""

    year: int
    month: int
    day: int
    is_leap_month: bool = False


@dataclass(frozen=True)
class YearRange:
    """How many years before and after the current one birthdays are expanded over."""

    past: int = 0
    future: int = 5

    def __post_init__(self):
        if self.past < 0 or self.future < 0:
            raise ValueError(f"Year range must be non-negative, got past={self.past} future={self.future}")

    def window(self, current_year: int) -> Tuple[int, int]:
        """Return the inclusive (start_year, end_year) window around ``current_year``."""
        return current_year - self.past, current_year + self.future


@dataclass
class Reminder:
    """A reminder ``value`` ``unit``s before the event, optionally at a wall-clock ``time``.

    ``time`` is an "HH:MM" string and only matters for all-day events.
    """

    value: int
    unit: ReminderUnit = ReminderUnit.MINUTES
    time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "Reminder":
        try:
            value = int(data["value"])
            unit = ReminderUnit(data.get("unit", ReminderUnit.MINUTES.value))
        except KeyError as exc:
            raise EventValidationError(missing_fields={"value"}, event_title="reminder") from exc
        except (TypeError, ValueError) as exc:
            raise EventValidationError(
                event_title="reminder", message=f"Invalid reminder {data!r}: {exc}"
            ) from exc
        if value < 0:
            raise EventValidationError(
                event_title="reminder", message=f"Reminder value must not be negative, got {value}"
            )

        time_of_day = data.get("time") or None
        if time_of_day is not None and not REMINDER_TIME_PATTERN.match(str(time_of_day)):
            raise EventValidationError(
                event_title="reminder", message=f"Invalid reminder time {time_of_day!r}, expected HH:MM"
            )
        return cls(value=value, unit=unit, time=time_of_day)

@dataclass
class Recurrence:
    """Structured form of an RRULE."""

    frequency: Frequency
    interval: Optional[int] = None
    count: Optional[int] = None
    until: Optional[datetime] = None
    by_week_day: Sequence[int] = ()
    by_month_day: Sequence[int] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "Recurrence":
        if "frequency" not in data:
            raise EventValidationError(missing_fields={"frequency"}, event_title="recurrence")
        try:
            frequency = Frequency(str(data["frequency"]).upper())
        except ValueError as exc:
            raise EventValidationError(
                event_title="recurrence", message=f"Unknown recurrence frequency {data['frequency']!r}"
            ) from exc

        until = data.get("until")
        try:
            by_week_day = tuple(int(d) for d in data.get("byWeekDay") or ())
            by_month_day = tuple(int(d) for d in data.get("byMonthDay") or ())
        except (TypeError, ValueError) as exc:
            raise EventValidationError(event_title="recurrence", message=str(exc)) from exc

        bad_week_days = [d for d in by_week_day if not 0 <= d <= 6]
        if bad_week_days:
            raise EventValidationError(
                event_title="recurrence", message=f"byWeekDay values must be 0-6 (Sunday-Saturday), got {bad_week_days}"
            )
        bad_month_days = [d for d in by_month_day if not 1 <= abs(d) <= 31]
        if bad_month_days:
            raise EventValidationError(
                event_title="recurrence", message=f"byMonthDay values must be 1-31 or -31 to -1, got {bad_month_days}"
            )

        return cls(
            frequency=frequency,
            interval=_optional_int(data.get("interval")),
            count=_optional_int(data.get("count")),
            until=_parse_datetime(until) if until else None,
            by_week_day=by_week_day,
            by_month_day=by_month_day,
        )


@dataclass
class EventBase:
    """Fields shared by every event variant."""

    id: str
    summary: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    reminders: List[Reminder] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict, default_summary: str = "") -> "EventBase":
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            summary=data.get("summary") or default_summary,
            description=data.get("description") or None,
            location=data.get("location") or None,
            reminders=[_load_reminder(r) for r in data.get("reminders") or ()],
            created_at=_parse_datetime(data["createdAt"]) if data.get("createdAt") else None,
            updated_at=_parse_datetime(data["updatedAt"]) if data.get("updatedAt") else None,
        )


@dataclass
class BirthdayEvent:
    """A yearly birthday, solar or lunar.

    For lunar birthdays ``birth_date.month``/``birth_date.day`` are lunar; the
    year is only used to compute the displayed age.
    """

    base: EventBase
    person_name: str
    birth_date: CalendarDate
    calendar_type: CalendarType = CalendarType.SOLAR
    show_age: bool = False

    kind: ClassVar[EventKind] = EventKind.BIRTHDAY
    REQUIRED_FIELDS: ClassVar[frozenset] = frozenset({"personName", "birthDate"})

    @property
    def id(self) -> str:
        return self.base.id

    @property
    def is_lunar(self) -> bool:
        return CalendarType(self.calendar_type) is CalendarType.LUNAR

    @classmethod
    def from_dict(cls, data: Dict) -> "BirthdayEvent":
        """Create a BirthdayEvent from the form layer's dictionary.

        Raises:
            EventValidationError: If required fields are missing or invalid.
        """
        missing = cls.REQUIRED_FIELDS - set(data.keys())
        if missing:
            raise EventValidationError(missing_fields=missing, event_title=data.get("personName"))

        person_name = str(data["personName"])
        try:
            birth_date = CalendarDate.parse(data["birthDate"])
            calendar_type = CalendarType(data.get("calendarType", CalendarType.SOLAR.value))
            if calendar_type is CalendarType.SOLAR:
                date(*birth_date)
        except ValueError as exc:
            raise EventValidationError(event_title=person_name, message=str(exc)) from exc

        return cls(
            base=EventBase.from_dict(data, default_summary=person_name),
            person_name=person_name,
            birth_date=birth_date,
            calendar_type=calendar_type,
            show_age=bool(data.get("showAge", False)),
        )


@dataclass
class RegularEvent:
    """A single event, optionally repeating according to ``recurrence``."""

    base: EventBase
    start_date: Union[date, datetime]
    end_date: Optional[Union[date, datetime]] = None
    all_day: bool = False
    recurrence: Optional[Recurrence] = None

    kind: ClassVar[EventKind] = EventKind.EVENT
    REQUIRED_FIELDS: ClassVar[frozenset] = frozenset({"summary", "startDate"})

    @property
    def id(self) -> str:
        return self.base.id

    @classmethod
    def from_dict(cls, data: Dict) -> "RegularEvent":
        """Create a RegularEvent from the form layer's dictionary.

        Raises:
            EventValidationError: If required fields are missing or invalid.
        """
        missing = cls.REQUIRED_FIELDS - set(data.keys())
        if missing:
            raise EventValidationError(missing_fields=missing, event_title=data.get("summary"))

        all_day = bool(data.get("allDay", False))
        try:
            start = _parse_datetime(data["startDate"])
            end = _parse_datetime(data["endDate"]) if data.get("endDate") else None
        except (ValueError, OverflowError) as exc:
            raise EventValidationError(event_title=data.get("summary"), message=str(exc)) from exc

        if all_day:
            start = start.date()
            end = end.date() if end is not None else None

        recurrence = data.get("recurrence")
        return cls(
            base=EventBase.from_dict(data),
            start_date=start,
            end_date=end,
            all_day=all_day,
            recurrence=Recurrence.from_dict(recurrence) if recurrence else None,
        )


Event = Union[BirthdayEvent, RegularEvent]

EVENT_TYPES = {
    EventKind.BIRTHDAY.value: BirthdayEvent,
    EventKind.EVENT.value: RegularEvent,
}


def event_from_dict(data: Dict) -> Event:
    """Dispatch on the ``type`` key and load the matching event variant."""
    event_type = data.get("type")
    event_cls = EVENT_TYPES.get(event_type)
    if event_cls is None:
        raise EventValidationError(
            event_title=data.get("summary") or data.get("personName"),
            message=f"Unknown event type {event_type!r}",
        )
    return event_cls.from_dict(data)


@dataclass
class CalendarDocument:
    """A named calendar and its ordered events."""

    id: str
    name: str
    timezone_id: str
    events: List[Event] = field(default_factory=list)
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict, default_timezone: Optional[str] = None) -> "CalendarDocument":
        """Load a document from its JSON form.

        Args:
            data: Parsed JSON payload.
            default_timezone: Timezone used when the payload has none.

        Raises:
            DocumentValidationError: If the payload is not a calendar document.
            EventValidationError: If one of its events is invalid.
        """
        if not isinstance(data, dict):
            raise DocumentValidationError(f"Expected a JSON object, got {type(data).__name__}")
        if not data.get("name"):
            raise DocumentValidationError("Calendar document is missing its name")

        events = data.get("events")
        if events is None:
            events = []
        if not isinstance(events, list):
            raise DocumentValidationError("'events' must be a list")

        tz_id = data.get("timezone") or default_timezone or DEFAULT_TIMEZONE
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            name=str(data["name"]),
            timezone_id=resolve_timezone_id(tz_id),
            events=[event_from_dict(e) for e in events],
            description=data.get("description") or None,
            created_at=_parse_datetime(data["createdAt"]) if data.get("createdAt") else None,
            updated_at=_parse_datetime(data["updatedAt"]) if data.get("updatedAt") else None,
        )


def _parse_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return parser.parse(str(value))


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _load_reminder(value) -> Reminder:
    if isinstance(value, Reminder):
        return value
    if isinstance(value, str):
        from icsgenerator.utils.reminders import parse_reminder_string

        reminder = parse_reminder_string(value)
        if reminder is None:
            raise EventValidationError(event_title="reminder", message=f"Invalid reminder {value!r}")
        return reminder
    return Reminder.from_dict(value)
