"""
rolls.py
Business-day adjustment of a date against a calendar.

Conventions:
- none               -> unchanged
- previous           -> step back to the first business day
- following          -> step forward to the first business day
- modified_following -> following, unless that leaves the month, then previous
- modified_previous  -> previous, unless that leaves the month, then following
"""

from __future__ import annotations
import logging
from typing import Literal

from calendars import WEEKEND, Calendar
from date_utils import Date, add_days
from date_errors import UnreachableBusinessDayError

logger = logging.getLogger(__name__)

Roll = Literal["none", "previous", "following", "modified_following", "modified_previous"]
ROLLS = ("none", "previous", "following", "modified_following", "modified_previous")

# A calendar with no business day in a year of steps is treated as broken.
MAX_ROLL_STEPS = 366


def _step(d: Date, direction: int, calendar: Calendar) -> Date:
    dd = d
    for _ in range(MAX_ROLL_STEPS + 1):
        if not calendar(dd):
            return dd
        dd = add_days(dd, direction)
    logger.error("No business day within %s days of %s", MAX_ROLL_STEPS, d)
    raise UnreachableBusinessDayError(
        f"no business day within {MAX_ROLL_STEPS} days {'after' if direction > 0 else 'before'} {d}"
    )


def adjust(d: Date, convention: Roll = "following", calendar: Calendar = WEEKEND) -> Date:
    """Adjust a date to a business day of calendar using convention."""
    if convention not in ROLLS:
        raise ValueError(f"Invalid business day convention: {convention}")

    if convention == "none" or not calendar(d):
        return d

    if convention == "following":
        return _step(d, 1, calendar)
    if convention == "previous":
        return _step(d, -1, calendar)

    first, fallback = (1, -1) if convention == "modified_following" else (-1, 1)
    dd = _step(d, first, calendar)
    if dd.month != d.month:
        logger.debug("%s: %s rolled to %s, leaves month; rolling the other way", convention, d, dd)
        dd = _step(d, fallback, calendar)
    return dd


def add_business_days(d: Date, n: int, calendar: Calendar = WEEKEND) -> Date:
    """Move n business days from d (backward for n < 0)."""
    if n == 0:
        return adjust(d, "following", calendar)
    direction = 1 if n > 0 else -1
    dd = d
    for _ in range(abs(n)):
        dd = _step(add_days(dd, direction), direction, calendar)
    return dd
