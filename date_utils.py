"""
date_utils.py
Calendar date model for schedule and day-count work.

- Date(year, month, day)          -> validated, immutable field date
- to_serial_days / from_serial_days -> days since 1970-01-01 and back
- date_difference(d0, d1)         -> d0 - d1 in years (365.2425-day year)
- add_years(d, t)                 -> inverse of date_difference
- add_months(d, n), add_period    -> field arithmetic with end-of-month clamping
- Period                          -> signed calendar step ("3M", "1Y", "2W", "10D")

Serial conversion is proleptic Gregorian with no year range limit, so it does
not go through datetime.date (years 1..9999 only).
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass
from datetime import date as _pydate
from typing import Literal

from date_errors import InvalidDateError

PeriodUnit = Literal["D", "W", "M", "Y"]

# Mean Gregorian year: 146097 days per 400 years.
DAYS_PER_YEAR = 365.2425

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


# ------------------------------
# Helpers
# ------------------------------
def is_leap(y: int) -> bool:
    return (y % 4 == 0 and y % 100 != 0) or (y % 400 == 0)


def days_in_month(y: int, m: int) -> int:
    if m == 2 and is_leap(y):
        return 29
    return _DAYS_IN_MONTH[m - 1]


def _days_from_civil(y: int, m: int, d: int) -> int:
    # Shift the year to start in March so the leap day is the last day of it.
    y = y - 1 if m <= 2 else y
    era = y // 400
    yoe = y - era * 400
    doy = (153 * (m - 3 if m > 2 else m + 9) + 2) // 5 + d - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _civil_from_days(z: int):
    z += 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    y = yoe + era * 400 + (1 if m <= 2 else 0)
    return y, m, d


# ------------------------------
# Date
# ------------------------------
@dataclass(frozen=True, order=True)
class Date:
    year: int
    month: int
    day: int

    def __post_init__(self):
        if (self.year, self.month, self.day) == (0, 0, 0):
            return  # INVALID_DATE sentinel
        if not 1 <= self.month <= 12:
            raise InvalidDateError(f"month out of range: {self.year}-{self.month}-{self.day}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise InvalidDateError(f"day out of range: {self.year}-{self.month}-{self.day}")

    def ok(self) -> bool:
        return self.month != 0

    @property
    def serial(self) -> int:
        return to_serial_days(self)

    @classmethod
    def from_pydate(cls, d: _pydate) -> Date:
        return cls(d.year, d.month, d.day)

    def to_pydate(self) -> _pydate:
        return _pydate(self.year, self.month, self.day)

    def __str__(self) -> str:
        if not self.ok():
            return "invalid"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


INVALID_DATE = Date(0, 0, 0)
EPOCH = Date(1970, 1, 1)


def make_date(year: int, month: int, day: int) -> Date:
    """Build a Date, raising InvalidDateError instead of clamping."""
    if (year, month, day) == (0, 0, 0):
        raise InvalidDateError("0-0-0 is reserved for the invalid date")
    return Date(year, month, day)


def parse_date(s: str) -> Date:
    try:
        y, m, d = map(int, s.strip().split("-"))
    except (AttributeError, ValueError) as e:
        raise InvalidDateError(f"expected YYYY-MM-DD, got {s!r}") from e
    return make_date(y, m, d)


def to_serial_days(d: Date) -> int:
    if not d.ok():
        raise InvalidDateError("invalid date has no serial day number")
    return _days_from_civil(d.year, d.month, d.day)


def from_serial_days(n: int) -> Date:
    return Date(*_civil_from_days(int(n)))


def weekday(d: Date) -> int:
    """0=Monday ... 6=Sunday, as datetime.date.weekday()."""
    # 1970-01-01 was a Thursday.
    return (to_serial_days(d) + 3) % 7


def add_days(d: Date, n: int) -> Date:
    if not d.ok():
        return INVALID_DATE
    return from_serial_days(to_serial_days(d) + n)


# ------------------------------
# Year durations
# ------------------------------
def date_difference(d0: Date, d1: Date) -> float:
    """d0 - d1 in years of DAYS_PER_YEAR days. NaN if either date is invalid."""
    if not (d0.ok() and d1.ok()):
        return math.nan
    return (to_serial_days(d0) - to_serial_days(d1)) / DAYS_PER_YEAR


def add_years(d: Date, t: float) -> Date:
    """Shift d by t years, rounded to whole days."""
    if not d.ok() or math.isnan(t):
        return INVALID_DATE
    return add_days(d, round(t * DAYS_PER_YEAR))


# ------------------------------
# Calendar periods
# ------------------------------
_TENOR = re.compile(r"^\s*([+-]?\d+)\s*([DWMY])\s*$", re.IGNORECASE)

# payments per year -> (count, unit)
_FREQUENCIES = {
    1: (12, "M"),   # annually
    2: (6, "M"),    # semiannually
    4: (3, "M"),    # quarterly
    12: (1, "M"),   # monthly
    52: (1, "W"),   # weekly
}


@dataclass(frozen=True)
class Period:
    count: int
    unit: PeriodUnit = "M"

    def __post_init__(self):
        if self.unit not in ("D", "W", "M", "Y"):
            raise ValueError(f"Unsupported period unit: {self.unit}")

    @property
    def sign(self) -> int:
        return (self.count > 0) - (self.count < 0)

    def __neg__(self) -> Period:
        return Period(-self.count, self.unit)

    def __mul__(self, k: int) -> Period:
        return Period(self.count * int(k), self.unit)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"{self.count}{self.unit}"

    @classmethod
    def parse(cls, tenor: str) -> Period:
        """'3M', '1Y', '2W', '10D', '-6M'."""
        m = _TENOR.match(tenor)
        if m is None:
            raise ValueError(f"Unsupported tenor: {tenor}")
        return cls(int(m.group(1)), m.group(2).upper())

    @classmethod
    def from_frequency(cls, freq: int) -> Period:
        """Regular step for a payment frequency (payments per year)."""
        if freq not in _FREQUENCIES:
            raise ValueError(f"Unsupported frequency: {freq}")
        return cls(*_FREQUENCIES[freq])


def add_months(d: Date, n: int) -> Date:
    if not d.ok():
        return INVALID_DATE
    y = d.year + (d.month - 1 + n) // 12
    m = (d.month - 1 + n) % 12 + 1
    day = min(d.day, days_in_month(y, m))
    return Date(y, m, day)


def add_period(d: Date, p: Period) -> Date:
    if p.unit == "D":
        return add_days(d, p.count)
    if p.unit == "W":
        return add_days(d, 7 * p.count)
    if p.unit == "Y":
        return add_months(d, 12 * p.count)
    return add_months(d, p.count)
