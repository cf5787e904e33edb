"""Timezone resolution and UTC normalization utilities."""

import logging
from datetime import datetime, tzinfo
from typing import Optional, Tuple

import pytz
import tzlocal
from dateutil import tz as du_tz

from icsgenerator.config.constants import ABBR_TO_TZ
from icsgenerator.exceptions.errors import TimezoneResolutionError

logger = logging.getLogger(__name__)


def resolve_timezone_id(tz_id: Optional[str]) -> str:
    """Map 'local' and common abbreviations to an IANA zone name.

    Args:
        tz_id: A zone name, abbreviation (e.g. "JST") or "local".

    Returns:
        The IANA zone name, or ``tz_id`` unchanged when no mapping applies.
    """
    tz_raw = (tz_id or "local").strip()
    tz_upper = tz_raw.upper()

    if tz_upper == "LOCAL":
        # User's system zone
        local_tz_obj = tzlocal.get_localzone()
        return getattr(local_tz_obj, "key", None) or getattr(local_tz_obj, "zone", None) or str(local_tz_obj)

    return ABBR_TO_TZ.get(tz_upper, tz_raw)


def lookup_timezone(tz_id: str) -> tzinfo:
    """Return a tzinfo for ``tz_id``.

    Raises:
        TimezoneResolutionError: If neither pytz nor dateutil know the zone.
    """
    tz_name = resolve_timezone_id(tz_id)
    try:
        return pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        # Last-ditch attempt with dateutil (may return fixed offset)
        tzobj = du_tz.gettz(tz_name)
        if tzobj is None:
            raise TimezoneResolutionError(tz_id)
        return tzobj


def resolve_timezone(tz_id: str, calendar_name: Optional[str] = None) -> Tuple[tzinfo, Optional[str]]:
    """Resolve a timezone string to a timezone object, falling back to UTC.

    Args:
        tz_id: The timezone string (e.g. "Asia/Shanghai", "JST", "local").
        calendar_name: Optional calendar name for the warning message.

    Returns:
        Tuple of (timezone_object, warning_message or None).
    """
    try:
        return lookup_timezone(tz_id), None
    except TimezoneResolutionError as exc:
        target = f"'{calendar_name}'" if calendar_name else "calendar"
        warning = (
            f"Couldn't resolve timezone '{exc.tz_id}' for {target} - "
            "using UTC for event times."
        )
        logger.warning(warning)
        return pytz.utc, warning


def to_utc(value: datetime) -> datetime:
    """Return ``value`` in UTC. Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return pytz.utc.localize(value.replace(tzinfo=None))
    return value.astimezone(pytz.utc)


def to_wall_clock(value: datetime, tzobj: tzinfo) -> datetime:
    """Return the wall-clock time of ``value`` in ``tzobj``.

    Naive datetimes are already wall-clock times and are returned unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tzobj)
