import logging
from datetime import date, datetime

import pytest
import pytz

from icsgenerator.core.models import Frequency, Recurrence
from icsgenerator.core.recurrence import build_rrule


def test_no_recurrence_yields_none() -> None:
    assert build_rrule(None) is None


def test_interval_and_count() -> None:
    rule = Recurrence(frequency=Frequency.WEEKLY, interval=2, count=5)
    assert build_rrule(rule) == "FREQ=WEEKLY;INTERVAL=2;COUNT=5"


def test_interval_one_is_elided() -> None:
    rule = Recurrence(frequency=Frequency.WEEKLY, interval=1, count=10)
    assert build_rrule(rule) == "FREQ=WEEKLY;COUNT=10"


def test_unbounded_recurrence() -> None:
    assert build_rrule(Recurrence(frequency=Frequency.DAILY)) == "FREQ=DAILY"


def test_plain_string_frequency() -> None:
    assert build_rrule(Recurrence(frequency="YEARLY")) == "FREQ=YEARLY"


def test_count_wins_over_until() -> None:
    rule = Recurrence(frequency=Frequency.DAILY, count=3, until=datetime(2024, 12, 31))
    assert build_rrule(rule) == "FREQ=DAILY;COUNT=3"


def test_until_naive_is_taken_as_utc() -> None:
    rule = Recurrence(frequency=Frequency.DAILY, until=datetime(2024, 12, 31, 23, 59, 59))
    assert build_rrule(rule) == "FREQ=DAILY;UNTIL=20241231T235959Z"


def test_until_aware_is_converted_to_utc() -> None:
    until = pytz.timezone("Asia/Shanghai").localize(datetime(2025, 1, 1, 8, 0, 0))
    rule = Recurrence(frequency=Frequency.DAILY, until=until)
    assert build_rrule(rule) == "FREQ=DAILY;UNTIL=20250101T000000Z"


def test_until_date_is_midnight() -> None:
    rule = Recurrence(frequency=Frequency.MONTHLY, until=date(2025, 6, 30))
    assert build_rrule(rule) == "FREQ=MONTHLY;UNTIL=20250630T000000Z"


def test_by_week_day_keeps_given_order() -> None:
    assert build_rrule(Recurrence(frequency=Frequency.WEEKLY, by_week_day=[1, 3, 5])) == "FREQ=WEEKLY;BYDAY=MO,WE,FR"
    assert build_rrule(Recurrence(frequency=Frequency.WEEKLY, by_week_day=[6, 0])) == "FREQ=WEEKLY;BYDAY=SA,SU"


def test_full_token_order() -> None:
    rule = Recurrence(
        frequency=Frequency.MONTHLY,
        interval=3,
        until=datetime(2025, 1, 1),
        by_week_day=[1],
        by_month_day=[1, 15],
    )
    assert build_rrule(rule) == "FREQ=MONTHLY;INTERVAL=3;UNTIL=20250101T000000Z;BYDAY=MO;BYMONTHDAY=1,15"


def test_empty_by_lists_are_omitted() -> None:
    rule = Recurrence(frequency=Frequency.WEEKLY, by_week_day=[], by_month_day=[])
    assert build_rrule(rule) == "FREQ=WEEKLY"


def test_non_positive_interval_is_clamped() -> None:
    assert build_rrule(Recurrence(frequency=Frequency.DAILY, interval=0)) == "FREQ=DAILY"
    assert build_rrule(Recurrence(frequency=Frequency.DAILY, interval=-2, count=4)) == "FREQ=DAILY;COUNT=4"


def test_zero_interval_logs_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert build_rrule(Recurrence(frequency=Frequency.DAILY, interval=0)) == "FREQ=DAILY"
    assert "not positive" in caplog.text


def test_missing_interval_does_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert build_rrule(Recurrence(frequency=Frequency.DAILY)) == "FREQ=DAILY"
    assert caplog.text == ""


def test_out_of_range_weekdays_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    rule = Recurrence(frequency=Frequency.WEEKLY, by_week_day=[-1, 1, 7])
    with caplog.at_level(logging.WARNING):
        assert build_rrule(rule) == "FREQ=WEEKLY;BYDAY=MO"
    assert "outside 0-6" in caplog.text
