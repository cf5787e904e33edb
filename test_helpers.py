import pytest

from icsgenerator.core.models import LunarDate, Reminder, ReminderUnit
from icsgenerator.utils import (
    calendar_filename,
    format_lunar_date,
    format_reminder,
    get_chinese_zodiac,
    get_lunar_day_name,
    get_lunar_month_name,
    parse_reminder_string,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1w", Reminder(1, ReminderUnit.WEEKS)),
        ("3d", Reminder(3, ReminderUnit.DAYS)),
        ("2h", Reminder(2, ReminderUnit.HOURS)),
        ("30m", Reminder(30, ReminderUnit.MINUTES)),
        ("0", Reminder(0, ReminderUnit.MINUTES)),
        ("60", Reminder(60, ReminderUnit.MINUTES)),
        (" 2D ", Reminder(2, ReminderUnit.DAYS)),
    ],
)
def test_parse_reminder_string(text, expected) -> None:
    assert parse_reminder_string(text) == expected


@pytest.mark.parametrize("text", [None, "", "  ", "invalid", "1x", "abc", "-5m"])
def test_parse_reminder_string_rejects(text) -> None:
    assert parse_reminder_string(text) is None


def test_format_reminder() -> None:
    assert format_reminder(Reminder(1, ReminderUnit.WEEKS)) == "提前1周"
    assert format_reminder(Reminder(3, ReminderUnit.DAYS)) == "提前3天"
    assert format_reminder(Reminder(2, ReminderUnit.HOURS)) == "提前2小时"
    assert format_reminder(Reminder(30, ReminderUnit.MINUTES)) == "提前30分钟"
    assert format_reminder(Reminder(0, ReminderUnit.MINUTES)) == "事件发生时"


def test_chinese_zodiac() -> None:
    assert get_chinese_zodiac(2024) == "龙"
    assert get_chinese_zodiac(2023) == "兔"
    assert get_chinese_zodiac(2022) == "虎"
    assert get_chinese_zodiac(1990) == "马"


def test_lunar_month_name() -> None:
    assert get_lunar_month_name(1) == "正"
    assert get_lunar_month_name(8) == "八"
    assert get_lunar_month_name(12) == "腊"
    assert get_lunar_month_name(13) == ""
    assert get_lunar_month_name(0) == ""


@pytest.mark.parametrize(
    "day, name",
    [(1, "初一"), (10, "初十"), (11, "十一"), (15, "十五"), (20, "二十"), (25, "廿五"), (30, "三十")],
)
def test_lunar_day_name(day, name) -> None:
    assert get_lunar_day_name(day) == name


def test_format_lunar_date() -> None:
    assert format_lunar_date(LunarDate(2024, 8, 15)) == "八月十五"
    assert format_lunar_date(LunarDate(2023, 2, 1, is_leap_month=True)) == "闰二月初一"


def test_calendar_filename() -> None:
    assert calendar_filename("Family Birthdays") == "Family_Birthdays.ics"
    assert calendar_filename("家人  生日") == "家人_生日.ics"
