"""
calendars.py
Holiday rules and business-day calendars as plain predicates.

A calendar is any callable Date -> bool that returns True when the date is
NOT a business day. Rules combine with union() (logical OR).

- is_weekend                      Saturday/Sunday
- month_day(m, d)                 fixed annual holiday (new_year_day, christmas_day)
- nth_weekday(m, wd, n)           floating holiday, n=-1 for the last one
- observed(rule)                  Saturday -> Friday before, Sunday -> Monday after
- holiday_dates(dates)            externally supplied holiday list
- union(*calendars)               non-business if any member says so

No exchange holiday data ships here; feed real lists through holiday_dates().
"""

from __future__ import annotations
from datetime import date as _pydate
from typing import Callable, Iterable, Union

from date_utils import Date, add_days, days_in_month, weekday

Calendar = Callable[[Date], bool]


def is_weekend(d: Date) -> bool:
    return d.ok() and weekday(d) >= 5  # 5=Sat, 6=Sun


# ------------------------------
# Holiday rules
# ------------------------------
def month_day(month: int, day: int) -> Calendar:
    """Holiday every year on the given month and day."""

    def rule(d: Date) -> bool:
        return d.month == month and d.day == day

    rule.__name__ = f"month_day_{month:02d}_{day:02d}"
    return rule


new_year_day = month_day(1, 1)
new_year_day.__name__ = "new_year_day"

christmas_day = month_day(12, 25)
christmas_day.__name__ = "christmas_day"


def nth_weekday(month: int, wd: int, n: int) -> Calendar:
    """n-th weekday wd (0=Mon) of month; n=-1 is the last one."""
    if n == 0 or not -1 <= n <= 5:
        raise ValueError(f"n must be 1..5 or -1, got {n}")
    if not 0 <= wd <= 6:
        raise ValueError(f"weekday must be 0..6, got {wd}")

    def rule(d: Date) -> bool:
        if d.month != month:
            return False
        if n > 0:
            first = weekday(Date(d.year, month, 1))
            target = 1 + (wd - first) % 7 + 7 * (n - 1)
        else:
            last_day = days_in_month(d.year, month)
            target = last_day - (weekday(Date(d.year, month, last_day)) - wd) % 7
        return d.day == target

    return rule


def observed(rule: Calendar) -> Calendar:
    """Also flag the weekday a weekend holiday is observed on."""

    def shifted(d: Date) -> bool:
        if not d.ok():
            return False
        if rule(d):
            return True
        wd = weekday(d)
        if wd == 4:
            return rule(add_days(d, 1))
        if wd == 0:
            return rule(add_days(d, -1))
        return False

    shifted.__name__ = f"observed_{getattr(rule, '__name__', 'rule')}"
    return shifted


def holiday_dates(dates: Iterable[Union[Date, _pydate]]) -> Calendar:
    """Calendar over an explicit holiday list (datetime.date values accepted)."""
    days = frozenset(d if isinstance(d, Date) else Date.from_pydate(d) for d in dates)

    def rule(d: Date) -> bool:
        return d in days

    return rule


# ------------------------------
# Composition
# ------------------------------
def union(*calendars: Calendar) -> Calendar:
    """Non-business day if any member flags it. Nested unions are flattened."""
    members = []
    for cal in calendars:
        if getattr(cal, "_is_union", False):
            members.extend(cal.members)
        else:
            members.append(cal)
    members = tuple(members)

    def cal(d: Date) -> bool:
        return any(m(d) for m in members)

    cal.members = members
    cal._is_union = True
    return cal


def is_business_day(d: Date, calendar: Calendar = is_weekend) -> bool:
    return not calendar(d)


WEEKEND: Calendar = is_weekend
EXAMPLE: Calendar = union(is_weekend, new_year_day)
