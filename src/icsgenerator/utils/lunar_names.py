"""Chinese names for lunar months, days and zodiac years."""

from icsgenerator.core.models import LunarDate

LUNAR_MONTH_NAMES = ("正", "二", "三", "四", "五", "六", "七", "八", "九", "十", "冬", "腊")

_DAY_TENS = ("初", "十", "廿", "三十")
_DAY_ONES = ("", "一", "二", "三", "四", "五", "六", "七", "八", "九")

ZODIAC_ANIMALS = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")


def get_lunar_month_name(month: int) -> str:
    """Return the month name ("正" .. "腊"), or "" for an invalid month."""
    if not 1 <= month <= 12:
        return ""
    return LUNAR_MONTH_NAMES[month - 1]


def get_lunar_day_name(day: int) -> str:
    """Return the day name, e.g. 1 -> "初一", 20 -> "二十", 25 -> "廿五"."""
    if day <= 10:
        return _DAY_TENS[0] + ("十" if day == 10 else _DAY_ONES[day])
    if day < 20:
        return _DAY_TENS[1] + _DAY_ONES[day - 10]
    if day == 20:
        return "二十"
    if day < 30:
        return _DAY_TENS[2] + _DAY_ONES[day - 20]
    return _DAY_TENS[3]


def format_lunar_date(lunar: LunarDate) -> str:
    """Format as e.g. "八月十五" or "闰二月初一"."""
    prefix = "闰" if lunar.is_leap_month else ""
    return f"{prefix}{get_lunar_month_name(lunar.month)}月{get_lunar_day_name(lunar.day)}"


def get_chinese_zodiac(year: int) -> str:
    return ZODIAC_ANIMALS[(year - 4) % 12]
