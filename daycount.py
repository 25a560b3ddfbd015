"""
daycount.py
Year fractions between two dates under common market day-count conventions.

Supported day-counts:
- "ACT/ACT"      (actual days / 365.2425, the mean Gregorian year)
- "30/360"       (bond basis: 31st -> 30th, end only when start >= 30)
- "ACT/360"      (Actual/360)
- "ACT/365"      (Actual/365 Fixed)
- "30E/360"      (Eurobond basis: every 31st -> 30th)
- "ACT/ACT ISDA" (split across calendar years, each over its own length)

Every convention is a plain function (d0, d1) -> float, NaN if either date is
the invalid sentinel, and antisymmetric:
f(d0, d1) == -f(d1, d0).
"""

from __future__ import annotations
import math
from typing import Callable, Dict, Iterable, Literal

import numpy as np

from date_utils import DAYS_PER_YEAR, Date, date_difference, is_leap, to_serial_days

DayCount = Literal["ACT/ACT", "30/360", "ACT/360", "ACT/365", "30E/360", "ACT/ACT ISDA"]
DayCountFn = Callable[[Date, Date], float]


# ------------------------------
# Day-count fractions
# ------------------------------
def _valid(d0: Date, d1: Date) -> bool:
    return d0.ok() and d1.ok()


def act_act(d0: Date, d1: Date) -> float:
    return date_difference(d1, d0)


def thirty_360(d0: Date, d1: Date) -> float:
    if not _valid(d0, d1):
        return math.nan
    if d1 < d0:
        return -thirty_360(d1, d0)
    D0 = 30 if d0.day == 31 else d0.day
    # the end-date rule looks at the adjusted start day
    D1 = 30 if (d1.day == 31 and D0 > 29) else d1.day
    return (360 * (d1.year - d0.year) + 30 * (d1.month - d0.month) + (D1 - D0)) / 360.0


def thirty_e_360(d0: Date, d1: Date) -> float:
    if not _valid(d0, d1):
        return math.nan
    D0 = 30 if d0.day == 31 else d0.day
    D1 = 30 if d1.day == 31 else d1.day
    return (360 * (d1.year - d0.year) + 30 * (d1.month - d0.month) + (D1 - D0)) / 360.0


def act_360(d0: Date, d1: Date) -> float:
    if not _valid(d0, d1):
        return math.nan
    return (to_serial_days(d1) - to_serial_days(d0)) / 360.0


def act_365(d0: Date, d1: Date) -> float:
    if not _valid(d0, d1):
        return math.nan
    return (to_serial_days(d1) - to_serial_days(d0)) / 365.0


def act_act_isda(d0: Date, d1: Date) -> float:
    """Actual days in each calendar year over that year's length (365 or 366)."""
    if not _valid(d0, d1):
        return math.nan
    if d1 < d0:
        return -act_act_isda(d1, d0)
    if d0.year == d1.year:
        return (to_serial_days(d1) - to_serial_days(d0)) / (366 if is_leap(d0.year) else 365)

    # split
    jan1_next = to_serial_days(Date(d0.year + 1, 1, 1))
    part = (jan1_next - to_serial_days(d0)) / (366 if is_leap(d0.year) else 365)
    part += d1.year - d0.year - 1  # whole years in between
    jan1_last = to_serial_days(Date(d1.year, 1, 1))
    part += (to_serial_days(d1) - jan1_last) / (366 if is_leap(d1.year) else 365)
    return part


DAY_COUNTS: Dict[str, DayCountFn] = {
    "ACT/ACT": act_act,
    "30/360": thirty_360,
    "ACT/360": act_360,
    "ACT/365": act_365,
    "30E/360": thirty_e_360,
    "ACT/ACT ISDA": act_act_isda,
}

# fixed denominators for the vectorised path
_ACTUAL_BASIS = {"ACT/ACT": DAYS_PER_YEAR, "ACT/360": 360.0, "ACT/365": 365.0}


def get_day_count(convention: str) -> DayCountFn:
    conv = convention.strip().upper()
    if conv not in DAY_COUNTS:
        raise ValueError(f"Unsupported day-count: {convention}")
    return DAY_COUNTS[conv]


def year_fraction(d0: Date, d1: Date, convention: DayCount = "ACT/ACT") -> float:
    """Compute year fraction from d0 to d1 using the given convention."""
    return get_day_count(convention)(d0, d1)


def accrual_fractions(dates: Iterable[Date], convention: DayCount = "ACT/ACT") -> np.ndarray:
    """Year fraction of each consecutive pair in dates (length n - 1)."""
    ds = list(dates)
    conv = convention.strip().upper()
    fn = get_day_count(conv)
    if len(ds) < 2:
        return np.zeros(0, dtype=float)
    if conv in _ACTUAL_BASIS and all(d.ok() for d in ds):
        serials = np.array([to_serial_days(d) for d in ds], dtype=np.int64)
        return np.diff(serials) / _ACTUAL_BASIS[conv]
    return np.array([fn(a, b) for a, b in zip(ds[:-1], ds[1:])], dtype=float)
