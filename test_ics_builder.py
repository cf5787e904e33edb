import logging
from datetime import date, datetime

import pytest
import pytz
from icalendar import Calendar

from icsgenerator.core.formatting import escape_text, format_date, format_datetime
from icsgenerator.config.settings import GeneratorConfig
from icsgenerator.core.ics_builder import default_year_range, generate_ics
from icsgenerator.core.models import (
    BirthdayEvent,
    CalendarDate,
    CalendarDocument,
    CalendarType,
    EventBase,
    Frequency,
    Recurrence,
    RegularEvent,
    Reminder,
    YearRange,
)

NOW = datetime(2024, 5, 1, 12, 30, 45, tzinfo=pytz.utc)
STAMP = "20240501T123045Z"

SHANGHAI_VTIMEZONE = [
    "BEGIN:VTIMEZONE",
    "TZID:Asia/Shanghai",
    "BEGIN:STANDARD",
    "DTSTART:19700101T000000",
    "TZOFFSETFROM:+0800",
    "TZOFFSETTO:+0800",
    "TZNAME:CST",
    "END:STANDARD",
    "END:VTIMEZONE",
]


def make_document(events=(), timezone_id="Asia/Shanghai", description=None) -> CalendarDocument:
    return CalendarDocument(
        id="cal-1",
        name="Test Calendar",
        timezone_id=timezone_id,
        events=list(events),
        description=description,
    )


def make_birthday(**kwargs) -> BirthdayEvent:
    fields = dict(
        base=EventBase(id="b1", summary="张三", reminders=[Reminder(1, "days", time="09:00")]),
        person_name="张三",
        birth_date=CalendarDate(1990, 5, 20),
        calendar_type=CalendarType.SOLAR,
        show_age=True,
    )
    fields.update(kwargs)
    return BirthdayEvent(**fields)


def lines_of(content: str):
    return content.split("\r\n")


def test_empty_calendar_is_exact() -> None:
    content = generate_ics(make_document(description="Test Description"), YearRange(0, 1), NOW)

    assert lines_of(content) == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//ICS Calendar Generator//EN",
        "X-WR-CALNAME:Test Calendar",
        "X-WR-CALDESC:Test Description",
        "X-WR-TIMEZONE:Asia/Shanghai",
        "CALSCALE:GREGORIAN",
        *SHANGHAI_VTIMEZONE,
        "END:VCALENDAR",
    ]
    assert "BEGIN:VEVENT" not in content


def test_empty_calendar_parses() -> None:
    content = generate_ics(make_document(), YearRange(0, 1), NOW)
    calendar = Calendar.from_ical(content.encode("utf-8"))

    assert str(calendar.get("X-WR-CALNAME")) == "Test Calendar"
    assert len(list(calendar.walk("VTIMEZONE"))) == 1
    assert list(calendar.walk("VEVENT")) == []


def test_description_header_only_when_present() -> None:
    content = generate_ics(make_document(), YearRange(0, 0), NOW)
    assert "X-WR-CALDESC" not in content


def test_other_timezones_have_no_vtimezone_block() -> None:
    content = generate_ics(make_document(timezone_id="America/New_York"), YearRange(0, 0), NOW)

    assert "X-WR-TIMEZONE:America/New_York" in lines_of(content)
    assert "BEGIN:VTIMEZONE" not in content


def test_lines_are_crlf_separated() -> None:
    content = generate_ics(make_document([make_birthday()]), YearRange(1, 1), NOW)

    assert "\r\n" in content
    assert "\n" not in content.replace("\r\n", "")
    assert not content.endswith("\r\n")


def test_birthday_vevent_is_exact() -> None:
    content = generate_ics(make_document([make_birthday()]), YearRange(0, 0), NOW)
    lines = lines_of(content)
    start = lines.index("BEGIN:VEVENT")

    assert lines[start:lines.index("END:VEVENT") + 1] == [
        "BEGIN:VEVENT",
        "UID:b1-2024",
        f"DTSTAMP:{STAMP}",
        f"CREATED:{STAMP}",
        f"LAST-MODIFIED:{STAMP}",
        "SUMMARY:张三生日 (34岁)",
        "DESCRIPTION:张三的生日",
        "DTSTART;VALUE=DATE:20240520",
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "DESCRIPTION:张三生日 (34岁)",
        "TRIGGER:-PT2340M",
        "END:VALARM",
        "END:VEVENT",
    ]


def test_birthday_expands_over_year_range() -> None:
    content = generate_ics(make_document([make_birthday()]), YearRange(past=2, future=3), NOW)
    calendar = Calendar.from_ical(content.encode("utf-8"))

    events = list(calendar.walk("VEVENT"))
    assert [str(e.get("UID")) for e in events] == [f"b1-{y}" for y in range(2022, 2028)]
    assert [e.decoded("DTSTART") for e in events] == [date(y, 5, 20) for y in range(2022, 2028)]


def test_default_year_range_comes_from_config() -> None:
    content = generate_ics(make_document([make_birthday()]), None, NOW)
    assert content.count("BEGIN:VEVENT") == 6


def test_default_year_range_follows_custom_config() -> None:
    config = GeneratorConfig(years_past=1, years_future=0, prodid="-//Custom//EN")
    assert default_year_range(config) == YearRange(1, 0)

    content = generate_ics(make_document([make_birthday()]), None, NOW, config)
    assert content.count("BEGIN:VEVENT") == 2
    assert "PRODID:-//Custom//EN" in lines_of(content)


def test_lunar_birthday_skips_missing_years() -> None:
    birthday = make_birthday(birth_date=CalendarDate(1990, 12, 30), calendar_type=CalendarType.LUNAR)
    now = datetime(2024, 6, 1, tzinfo=pytz.utc)

    content = generate_ics(make_document([birthday]), YearRange(past=1, future=2), now)

    assert content.count("BEGIN:VEVENT") == 2
    assert "DTSTART;VALUE=DATE:20230121" in content
    assert "DTSTART;VALUE=DATE:20240209" in content


def test_timed_event_keeps_tzid_and_trailing_z() -> None:
    event = RegularEvent(
        base=EventBase(id="evt-1", summary="Standup"),
        start_date=datetime(2024, 6, 1, 9, 30),
        end_date=datetime(2024, 6, 1, 10, 30),
        recurrence=Recurrence(frequency=Frequency.WEEKLY, interval=2, count=5),
    )
    lines = lines_of(generate_ics(make_document([event]), YearRange(0, 0), NOW))

    assert "UID:evt-1" in lines
    assert "DTSTART;TZID=Asia/Shanghai:20240601T093000Z" in lines
    assert "DTEND;TZID=Asia/Shanghai:20240601T103000Z" in lines
    assert "RRULE:FREQ=WEEKLY;INTERVAL=2;COUNT=5" in lines
    assert lines.index("DTEND;TZID=Asia/Shanghai:20240601T103000Z") < lines.index("RRULE:FREQ=WEEKLY;INTERVAL=2;COUNT=5")


def test_aware_start_is_rendered_in_calendar_timezone() -> None:
    event = RegularEvent(
        base=EventBase(id="evt-2", summary="Call"),
        start_date=pytz.utc.localize(datetime(2024, 6, 1, 1, 30)),
    )
    lines = lines_of(generate_ics(make_document([event]), YearRange(0, 0), NOW))

    assert "DTSTART;TZID=Asia/Shanghai:20240601T093000Z" in lines
    assert not any(line.startswith("DTEND") for line in lines)


def test_all_day_event_end_is_exclusive() -> None:
    event = RegularEvent(
        base=EventBase(id="trip", summary="Trip"),
        start_date=date(2024, 7, 1),
        end_date=date(2024, 7, 3),
        all_day=True,
    )
    lines = lines_of(generate_ics(make_document([event]), YearRange(0, 0), NOW))

    assert "DTSTART;VALUE=DATE:20240701" in lines
    assert "DTEND;VALUE=DATE:20240704" in lines


def test_all_day_event_without_end_has_no_dtend() -> None:
    event = RegularEvent(base=EventBase(id="d", summary="Day off"), start_date=date(2024, 12, 31), all_day=True)
    content = generate_ics(make_document([event]), YearRange(0, 0), NOW)
    assert "DTEND" not in content


def test_free_text_is_escaped_everywhere() -> None:
    summary = "A,B;C\\D\nE"
    event = RegularEvent(
        base=EventBase(
            id="esc",
            summary=summary,
            description="line1\r\nline2",
            location="Room 1, Floor 2",
            reminders=[Reminder(10, "minutes")],
        ),
        start_date=datetime(2024, 6, 1, 9, 0),
    )
    document = CalendarDocument(id="c", name="Work; Home",timezone_id="Asia/Shanghai", events=[event])
    lines = lines_of(generate_ics(document, YearRange(0, 0), NOW))

    assert "X-WR-CALNAME:Work\\; Home" in lines
    assert "SUMMARY:A\\,B\\;C\\\\D\\nE" in lines
    assert "DESCRIPTION:line1\\r\\nline2" in lines
    assert "LOCATION:Room 1\\, Floor 2" in lines
    # Alarm description is escaped as well
    assert lines.count("DESCRIPTION:A\\,B\\;C\\\\D\\nE") == 1


def test_multiple_reminders_yield_ordered_alarms() -> None:
    event = RegularEvent(
        base=EventBase(
            id="r",
            summary="Exam",
            reminders=[Reminder(1, "weeks"), Reminder(2, "hours"), Reminder(0, "minutes")],
        ),
        start_date=datetime(2024, 6, 1, 9, 0),
    )
    content = generate_ics(make_document([event]), YearRange(0, 0), NOW)
    triggers = [line for line in lines_of(content) if line.startswith("TRIGGER:")]
    assert triggers == ["TRIGGER:-PT10080M", "TRIGGER:-PT120M", "TRIGGER:-PT0M"]


def test_event_order_is_preserved() -> None:
    regular = RegularEvent(base=EventBase(id="first", summary="First"), start_date=datetime(2024, 1, 1, 8, 0))
    content = generate_ics(make_document([regular, make_birthday()]), YearRange(0, 0), NOW)
    uids = [line for line in lines_of(content) if line.startswith("UID:")]
    assert uids == ["UID:first", "UID:b1-2024"]


def test_generation_is_deterministic() -> None:
    document = make_document([make_birthday()], description="Family")
    first = generate_ics(document, YearRange(1, 3), NOW)
    second = generate_ics(document, YearRange(1, 3), NOW)
    assert first == second


def test_naive_now_is_taken_as_utc() -> None:
    document = make_document([make_birthday()])
    naive = generate_ics(document, YearRange(0, 0), NOW.replace(tzinfo=None))
    assert naive == generate_ics(document, YearRange(0, 0), NOW)


def test_aware_now_is_normalized_to_utc() -> None:
    # 05:00 on Jan 1 in Shanghai is still Dec 31 in UTC
    now = pytz.timezone("Asia/Shanghai").localize(datetime(2024, 1, 1, 5, 0, 0))
    lines = lines_of(generate_ics(make_document([make_birthday()]), YearRange(0, 0), now))

    assert "DTSTAMP:20231231T210000Z" in lines
    assert "UID:b1-2023" in lines


def test_unknown_timezone_is_referenced_verbatim(caplog: pytest.LogCaptureFixture) -> None:
    event = RegularEvent(base=EventBase(id="m", summary="Landing"), start_date=datetime(2024, 6, 1, 9, 0))
    with caplog.at_level(logging.WARNING):
        content = generate_ics(make_document([event], timezone_id="Mars/Olympus"), YearRange(0, 0), NOW)

    assert "DTSTART;TZID=Mars/Olympus:20240601T090000Z" in lines_of(content)
    assert "Mars/Olympus" in caplog.text


def test_escape_text() -> None:
    assert escape_text(None) == ""
    assert escape_text("") == ""
    assert escape_text("plain") == "plain"
    assert escape_text("a\\;") == "a\\\\\\;"
    assert escape_text("x,y") == "x\\,y"


def test_date_formats_are_zero_padded() -> None:
    assert format_date(date(2024, 1, 5)) == "20240105"
    assert format_datetime(datetime(2024, 1, 5, 7, 8, 9)) == "20240105T070809"
