"""Centralized constants for the ICS calendar generator.

Everything here is fixed output contract: changing a value changes the
bytes of every generated calendar.
"""

import re

# ICS calendar constants
ICS_PRODID = "-//ICS Calendar Generator//EN"
ICS_VERSION = "2.0"
ICS_CALSCALE = "GREGORIAN"
ICS_LINE_ENDING = "\r\n"

# Suffix marking a UTC date-time
ICS_UTC_SUFFIX = "Z"

# Alarm trigger, rendered as minutes before the event start
ALARM_ACTION = "DISPLAY"
ALARM_TRIGGER_TEMPLATE = "-PT{minutes}M"

# Reminder unit -> minutes
REMINDER_UNIT_MINUTES = {
    "weeks": 7 * 24 * 60,
    "days": 24 * 60,
    "hours": 60,
    "minutes": 1,
}
MINUTES_PER_DAY = 24 * 60

# RRULE weekday codes, indexed 0 (Sunday) .. 6 (Saturday)
RRULE_WEEKDAY_CODES = ("SU", "MO", "TU", "WE", "TH", "FR", "SA")

# Built-in VTIMEZONE definitions. Any other zone is referenced by TZID only.
BUILTIN_VTIMEZONES = {
    "Asia/Shanghai": (
        "BEGIN:VTIMEZONE",
        "TZID:Asia/Shanghai",
        "BEGIN:STANDARD",
        "DTSTART:19700101T000000",
        "TZOFFSETFROM:+0800",
        "TZOFFSETTO:+0800",
        "TZNAME:CST",
        "END:STANDARD",
        "END:VTIMEZONE",
    ),
}

# Default calendar settings
DEFAULT_TIMEZONE = "Asia/Shanghai"
DEFAULT_YEARS_PAST = 0
DEFAULT_YEARS_FUTURE = 5

# Birthday labels
DEFAULT_BIRTHDAY_SUFFIX = "生日"
DEFAULT_AGE_FORMAT = " ({age}岁)"
DEFAULT_BIRTHDAY_DESCRIPTION_FORMAT = "{name}的生日"

# Environment variables read by load_config()
ENV_DEFAULT_TIMEZONE = "ICSGEN_DEFAULT_TIMEZONE"
ENV_YEARS_PAST = "ICSGEN_YEARS_PAST"
ENV_YEARS_FUTURE = "ICSGEN_YEARS_FUTURE"
ENV_PRODID = "ICSGEN_PRODID"

# Timezone abbreviation to IANA zone mapping
ABBR_TO_TZ = {
    # East Asia
    "CST": "Asia/Shanghai",
    "HKT": "Asia/Hong_Kong",
    "JST": "Asia/Tokyo",
    "KST": "Asia/Seoul",
    "SGT": "Asia/Singapore",
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
    # Australia
    "AEST": "Australia/Sydney",
    "AEDT": "Australia/Sydney",
}

# Input patterns
REMINDER_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
REMINDER_SHORTHAND_PATTERN = re.compile(r"^(\d+)([wdhm])$")
CALENDAR_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")

REMINDER_SHORTHAND_UNITS = {
    "w": "weeks",
    "d": "days",
    "h": "hours",
    "m": "minutes",
}
