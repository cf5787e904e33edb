"""Conversion between Chinese lunar dates and Gregorian dates (1900-2100).

All conversions walk the lunar year table from a fixed epoch: lunar
1900-01-01 is Gregorian 1900-01-31. Dates outside the table yield ``None``.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from icsgenerator.core import lunar_data
from icsgenerator.core.models import LunarDate

logger = logging.getLogger(__name__)


def lunar_to_solar(year: int, month: int, day: int, is_leap: bool = False) -> Optional[date]:
    """Convert a lunar date to its Gregorian date.

    Args:
        year: Lunar year, 1900-2100.
        month: Lunar month, 1-12.
        day: Lunar day, 1-30.
        is_leap: Whether the date falls in the leap month following ``month``.

    Returns:
        The Gregorian date, or None if the lunar date does not exist.
    """
    if not lunar_data.in_range(year) or not 1 <= month <= 12:
        return None

    leap = lunar_data.leap_month(year)
    if is_leap and leap != month:
        return None

    length = lunar_data.leap_month_days(year) if is_leap else lunar_data.month_days(year, month)
    if not 1 <= day <= length:
        return None

    offset = lunar_data.days_before_year(year)
    for m in range(1, month):
        offset += lunar_data.month_days(year, m)
        if m == leap:
            offset += lunar_data.leap_month_days(year)
    if is_leap:
        # The leap month follows the regular month of the same number
        offset += lunar_data.month_days(year, month)

    return lunar_data.LUNAR_EPOCH + timedelta(days=offset + day - 1)


def solar_to_lunar(value: date) -> Optional[LunarDate]:
    """Convert a Gregorian date to its lunar date.

    Args:
        value: A date (or datetime, whose time is ignored).

    Returns:
        The LunarDate, or None outside the supported range.
    """
    if isinstance(value, datetime):
        value = value.date()
    if value < lunar_data.LUNAR_EPOCH or value > lunar_data.LUNAR_UPPER_BOUND:
        return None

    offset = (value - lunar_data.LUNAR_EPOCH).days

    year = lunar_data.MIN_LUNAR_YEAR
    while offset >= lunar_data.year_days(year):
        offset -= lunar_data.year_days(year)
        year += 1

    leap = lunar_data.leap_month(year)
    month = 1
    is_leap = False
    while True:
        length = lunar_data.month_days(year, month)
        if offset < length:
            break
        offset -= length

        if month == leap:
            length = lunar_data.leap_month_days(year)
            if offset < length:
                is_leap = True
                break
            offset -= length

        month += 1

    return LunarDate(year=year, month=month, day=offset + 1, is_leap_month=is_leap)


def get_birthday_in_solar_year(
    lunar_birth_year: int,
    lunar_month: int,
    lunar_day: int,
    target_solar_year: int,
) -> Optional[date]:
    """Find the Gregorian date in ``target_solar_year`` of a lunar birthday.

    Lunar new year falls in January or February, so the birthday in a given
    solar year belongs either to the lunar year of the same number or, for
    late months, to the previous one. The same-numbered lunar year is tried
    first. ``lunar_birth_year`` does not affect the result.

    Returns:
        The Gregorian date, or None if no candidate lands in the target year
        (for example day 30 of a month that has only 29 days).
    """
    for lunar_year in (target_solar_year, target_solar_year - 1):
        candidate = lunar_to_solar(lunar_year, lunar_month, lunar_day)
        if candidate is not None and candidate.year == target_solar_year:
            return candidate

    logger.debug(
        "No lunar %02d-%02d in solar year %d (born %d)",
        lunar_month, lunar_day, target_solar_year, lunar_birth_year,
    )
    return None
