"""
schedules.py
Periodic payment dates between an effective and a termination date.

Dates are generated backward from termination in steps of period, so the
last date is always termination and any leftover (the stub) sits at the
front. Iteration yields dates from effective towards termination, each
passed through the roll convention; the unadjusted dates drive the stepping
so adjustments never accumulate.

- schedule(effective, termination, "6M", roll="modified_following", calendar=EXAMPLE)
- Schedule.valid()        -> period direction agrees with effective -> termination
- Schedule.unadjusted()   -> the raw period dates
- Schedule.periods()      -> (start, end) pairs of adjusted dates
- Schedule.as_dataframe() -> pandas view with accrual fractions
- coupon_dates(issue, maturity, freq) -> adjusted coupon dates after issue
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

import numpy as np
import pandas as pd

from calendars import WEEKEND, Calendar
from date_utils import Date, Period, add_period
from daycount import DayCount, accrual_fractions
from date_errors import InvalidScheduleError
from rolls import Roll, adjust

logger = logging.getLogger(__name__)


def _as_period(period: Union[Period, str, int]) -> Period:
    if isinstance(period, Period):
        return period
    if isinstance(period, str):
        return Period.parse(period)
    return Period(int(period), "M")


@dataclass(frozen=True)
class Schedule:
    """
    Dates run from effective towards termination and always end on termination.
    With a positive period that is earliest to latest. A negative period
    (effective after termination) yields them latest to earliest.
    """

    effective: Date
    termination: Date
    period: Period
    roll: Roll = "none"
    calendar: Calendar = WEEKEND

    def valid(self) -> bool:
        """Order of effective/termination and direction of period are compatible."""
        if not (self.effective.ok() and self.termination.ok()):
            return False
        if self.period.sign == 0 or self.effective == self.termination:
            return self.period.sign == 0 and self.effective == self.termination
        return (self.effective < self.termination) == (self.period.sign > 0)

    def check(self) -> Schedule:
        if not self.valid():
            raise InvalidScheduleError(
                f"period {self.period} does not run from {self.effective} to {self.termination}"
            )
        return self

    def _steps_back(self) -> int:
        """Number of whole periods between termination and the first date."""
        if self.period.sign == 0:
            return 0
        forward = self.period.sign > 0
        k = 0
        while True:
            prev = add_period(self.termination, -(k + 1) * self.period)
            if (prev < self.effective) if forward else (prev > self.effective):
                break
            k += 1
        logger.debug("Schedule %s -> %s by %s anchored %s periods back", self.effective, self.termination, self.period, k)
        return k

    def unadjusted(self) -> Iterator[Date]:
        if not self.valid():
            return
        # each date is measured from termination, not from its neighbour
        for k in range(self._steps_back(), -1, -1):
            yield add_period(self.termination, -k * self.period)

    def __iter__(self) -> Iterator[Date]:
        for d in self.unadjusted():
            yield adjust(d, self.roll, self.calendar)

    def __len__(self) -> int:
        return self._steps_back() + 1 if self.valid() else 0

    def stub(self) -> bool:
        """True when the first date falls after effective (short front period)."""
        first = next(self.unadjusted(), None)
        return first is not None and first != self.effective

    def periods(self) -> List[Tuple[Date, Date]]:
        ds = list(self)
        return list(zip(ds[:-1], ds[1:]))

    def as_dataframe(self, day_count: DayCount = "ACT/ACT") -> pd.DataFrame:
        """Return schedule as pandas DataFrame."""
        raw = list(self.unadjusted())
        adjusted = [adjust(d, self.roll, self.calendar) for d in raw]
        accrual = np.concatenate([[np.nan], accrual_fractions(adjusted, day_count)]) if adjusted else []
        return pd.DataFrame(
            {
                "unadjusted": [str(d) for d in raw],
                "date": [str(d) for d in adjusted],
                "accrual": accrual,
            }
        )


def schedule(
    effective: Date,
    termination: Date,
    period: Union[Period, str, int],
    roll: Roll = "none",
    calendar: Calendar = WEEKEND,
) -> Schedule:
    """Build a Schedule; an int period is a number of months."""
    return Schedule(effective, termination, _as_period(period), roll, calendar)


def coupon_dates(
    issue_date: Date,
    maturity_date: Date,
    freq: int,
    roll: Roll = "following",
    calendar: Calendar = WEEKEND,
) -> List[Date]:
    """
    Return adjusted coupon dates strictly after issue_date up to and including maturity_date.
    """
    s = Schedule(issue_date, maturity_date, Period.from_frequency(freq), roll, calendar)
    return [adjust(d, roll, calendar) for d in s.unadjusted() if d > issue_date]
