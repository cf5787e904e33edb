"""RRULE serialization for repeating events."""

import logging
from typing import List, Optional

from icsgenerator.config.constants import RRULE_WEEKDAY_CODES
from icsgenerator.core.formatting import format_utc_timestamp
from icsgenerator.core.models import Frequency, Recurrence

logger = logging.getLogger(__name__)


def build_rrule(recurrence: Optional[Recurrence]) -> Optional[str]:
    """Serialize a Recurrence into an RRULE value.

    Token order is FREQ, INTERVAL, COUNT or UNTIL, BYDAY, BYMONTHDAY.
    INTERVAL is omitted when it is 1, and COUNT wins when both COUNT and
    UNTIL are set.

    Args:
        recurrence: The recurrence, or None.

    Returns:
        The RRULE value (without the "RRULE:" prefix), or None.
    """
    if recurrence is None:
        return None

    parts: List[str] = [f"FREQ={Frequency(recurrence.frequency).value}"]

    interval = 1 if recurrence.interval is None else recurrence.interval
    if interval < 1:
        logger.warning("Recurrence interval %s is not positive, using 1", recurrence.interval)
        interval = 1
    if interval > 1:
        parts.append(f"INTERVAL={interval}")

    count = recurrence.count if recurrence.count and recurrence.count > 0 else None
    if count is not None:
        if recurrence.until is not None:
            logger.warning("Recurrence has both COUNT and UNTIL, keeping COUNT=%d", count)
        parts.append(f"COUNT={count}")
    elif recurrence.until is not None:
        parts.append(f"UNTIL={format_utc_timestamp(recurrence.until)}")

    week_days = [d for d in recurrence.by_week_day if 0 <= d < len(RRULE_WEEKDAY_CODES)]
    if len(week_days) != len(recurrence.by_week_day):
        logger.warning("Dropping weekdays outside 0-6 from %s", list(recurrence.by_week_day))
    if week_days:
        parts.append("BYDAY=" + ",".join(RRULE_WEEKDAY_CODES[d] for d in week_days))

    if recurrence.by_month_day:
        parts.append("BYMONTHDAY=" + ",".join(str(d) for d in recurrence.by_month_day))

    rrule = ";".join(parts)
    logger.debug("Built RRULE %s", rrule)
    return rrule
