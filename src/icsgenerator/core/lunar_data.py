"""Lunar calendar year table, 1900-2100.

Each entry encodes one lunar year:

- bits 0-3: leap month (0 when the year has none)
- bits 4-15: month lengths, month 1 at bit 15 down to month 12 at bit 4
  (set -> 30 days, clear -> 29 days)
- bit 16: leap month length (set -> 30 days, clear -> 29 days)

Derived per-year totals and cumulative day offsets are computed once at
import; nothing in this module is written afterwards.
"""

from datetime import date
from itertools import accumulate
from typing import Tuple

MIN_LUNAR_YEAR = 1900
MAX_LUNAR_YEAR = 2100

# Gregorian date of lunar 1900-01-01
LUNAR_EPOCH = date(1900, 1, 31)

LUNAR_YEAR_INFO: Tuple[int, ...] = (
    0x04bd8, 0x04ae0, 0x0a570, 0x054d5, 0x0d260, 0x0d950, 0x16554, 0x056a0, 0x09ad0, 0x055d2,  # 1900-1909
    0x04ae0, 0x0a5b6, 0x0a4d0, 0x0d250, 0x1d255, 0x0b540, 0x0d6a0, 0x0ada2, 0x095b0, 0x14977,  # 1910-1919
    0x04970, 0x0a4b0, 0x0b4b5, 0x06a50, 0x06d40, 0x1ab54, 0x02b60, 0x09570, 0x052f2, 0x04970,  # 1920-1929
    0x06566, 0x0d4a0, 0x0ea50, 0x06e95, 0x05ad0, 0x02b60, 0x186e3, 0x092e0, 0x1c8d7, 0x0c950,  # 1930-1939
    0x0d4a0, 0x1d8a6, 0x0b550, 0x056a0, 0x1a5b4, 0x025d0, 0x092d0, 0x0d2b2, 0x0a950, 0x0b557,  # 1940-1949
    0x06ca0, 0x0b550, 0x15355, 0x04da0, 0x0a5d0, 0x14573, 0x052d0, 0x0a9a8, 0x0e950, 0x06aa0,  # 1950-1959
    0x0aea6, 0x0ab50, 0x04b60, 0x0aae4, 0x0a570, 0x05260, 0x0f263, 0x0d950, 0x05b57, 0x056a0,  # 1960-1969
    0x096d0, 0x04dd5, 0x04ad0, 0x0a4d0, 0x0d4d4, 0x0d250, 0x0d558, 0x0b540, 0x0b6a0, 0x195a6,  # 1970-1979
    0x095b0, 0x049b0, 0x0a974, 0x0a4b0, 0x0b27a, 0x06a50, 0x06d40, 0x0af46, 0x0ab60, 0x09570,  # 1980-1989
    0x04af5, 0x04970, 0x064b0, 0x074a3, 0x0ea50, 0x06b58, 0x055c0, 0x0ab60, 0x096d5, 0x092e0,  # 1990-1999
    0x0c960, 0x0d954, 0x0d4a0, 0x0da50, 0x07552, 0x056a0, 0x0abb7, 0x025d0, 0x092d0, 0x0cab5,  # 2000-2009
    0x0a950, 0x0b4a0, 0x0baa4, 0x0ad50, 0x055d9, 0x04ba0, 0x0a5b0, 0x15176, 0x052b0, 0x0a930,  # 2010-2019
    0x07954, 0x06aa0, 0x0ad50, 0x05b52, 0x04b60, 0x0a6e6, 0x0a4e0, 0x0d260, 0x0ea65, 0x0d530,  # 2020-2029
    0x05aa0, 0x076a3, 0x096d0, 0x04bd7, 0x04ad0, 0x0a4d0, 0x1d0b6, 0x0d250, 0x0d520, 0x0dd45,  # 2030-2039
    0x0b5a0, 0x056d0, 0x055b2, 0x049b0, 0x0a577, 0x0a4b0, 0x0aa50, 0x1b255, 0x06d20, 0x0ada0,  # 2040-2049
    0x14b63, 0x09370, 0x049f8, 0x04970, 0x064b0, 0x168a6, 0x0ea50, 0x06b20, 0x1a6c4, 0x0aae0,  # 2050-2059
    0x0a2e0, 0x0d2e3, 0x0c960, 0x0d557, 0x0d4a0, 0x0da50, 0x05d55, 0x056a0, 0x0a6d0, 0x055d4,  # 2060-2069
    0x052d0, 0x0a9b8, 0x0a950, 0x0b4a0, 0x0b6a6, 0x0ad50, 0x055a0, 0x0aba4, 0x0a5b0, 0x052b0,  # 2070-2079
    0x0b273, 0x06930, 0x07337, 0x06aa0, 0x0ad50, 0x14b55, 0x04b60, 0x0a570, 0x054e4, 0x0d160,  # 2080-2089
    0x0e968, 0x0d520, 0x0daa0, 0x16aa6, 0x056d0, 0x04ae0, 0x0a9d4, 0x0a2d0, 0x0d150, 0x0f252,  # 2090-2099
    0x0d520,  # 2100
)


def in_range(year: int) -> bool:
    return MIN_LUNAR_YEAR <= year <= MAX_LUNAR_YEAR


def leap_month(year: int) -> int:
    """Return the leap month of a lunar year, or 0 if it has none."""
    return LUNAR_YEAR_INFO[year - MIN_LUNAR_YEAR] & 0xF


def leap_month_days(year: int) -> int:
    """Return the length of the leap month, or 0 if the year has none."""
    if not leap_month(year):
        return 0
    return 30 if LUNAR_YEAR_INFO[year - MIN_LUNAR_YEAR] & 0x10000 else 29


def month_days(year: int, month: int) -> int:
    """Return the length of a regular (non-leap) lunar month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid lunar month: {month}")
    return 30 if LUNAR_YEAR_INFO[year - MIN_LUNAR_YEAR] & (0x10000 >> month) else 29


def _count_year_days(year: int) -> int:
    return sum(month_days(year, m) for m in range(1, 13)) + leap_month_days(year)


YEAR_DAYS: Tuple[int, ...] = tuple(
    _count_year_days(y) for y in range(MIN_LUNAR_YEAR, MAX_LUNAR_YEAR + 1)
)

# YEAR_OFFSETS[i] = days from the epoch to lunar new year of MIN_LUNAR_YEAR + i
YEAR_OFFSETS: Tuple[int, ...] = tuple(accumulate(YEAR_DAYS, initial=0))

# Last Gregorian date covered by the table
LUNAR_UPPER_BOUND = date.fromordinal(LUNAR_EPOCH.toordinal() + YEAR_OFFSETS[-1] - 1)


def year_days(year: int) -> int:
    """Return the total number of days in a lunar year."""
    return YEAR_DAYS[year - MIN_LUNAR_YEAR]


def days_before_year(year: int) -> int:
    """Return the day count from the epoch to lunar new year of ``year``."""
    return YEAR_OFFSETS[year - MIN_LUNAR_YEAR]
