"""
Unit tests for schedules.py
Covers:
- Backward anchoring at termination and front stubs
- Invalid (direction-mismatched) schedules
- Roll pass without compounding
- Coupon dates and the DataFrame view
"""

import math

import pytest

from calendars import EXAMPLE
from date_utils import Date, Period
from date_errors import InvalidScheduleError
from schedules import Schedule, coupon_dates, schedule


def test_whole_years_include_effective():
    s = schedule(Date(2023, 1, 2), Date(2025, 1, 2), Period(12))
    assert list(s) == [Date(2023, 1, 2), Date(2024, 1, 2), Date(2025, 1, 2)]
    assert len(s) == 3
    assert not s.stub()


def test_front_stub_absorbed():
    s = schedule(Date(2023, 1, 3), Date(2025, 1, 2), Period(12))
    assert list(s) == [Date(2024, 1, 2), Date(2025, 1, 2)]
    assert s.stub()


def test_last_date_is_termination():
    ter = Date(2030, 8, 17)
    for tenor in ("1M", "3M", "6M", "1Y", "1W", "10D"):
        dates = list(schedule(Date(2027, 2, 3), ter, tenor))
        assert dates[-1] == ter
        assert dates == sorted(dates)
        assert dates[0] >= Date(2027, 2, 3)


def test_restartable():
    s = schedule(Date(2023, 1, 2), Date(2025, 1, 2), "6M")
    assert list(s) == list(s)
    it = iter(s)
    assert next(it) == Date(2023, 1, 2)
    assert list(s)[0] == Date(2023, 1, 2)


def test_invalid_schedule_is_empty():
    s = schedule(Date(2025, 1, 2), Date(2023, 1, 2), Period(12))
    assert not s.valid()
    assert list(s) == []
    assert len(s) == 0
    assert not s
    with pytest.raises(InvalidScheduleError):
        s.check()


def test_zero_period():
    d = Date(2024, 5, 1)
    assert list(schedule(d, d, Period(0))) == [d]
    assert list(schedule(d, d, Period(3))) == []
    assert list(schedule(d, Date(2025, 5, 1), Period(0))) == []
    assert list(schedule(Date(2025, 5, 1), d, Period(0))) == []


def test_negative_period_runs_from_effective():
    s = schedule(Date(2025, 1, 2), Date(2023, 1, 2), Period(-12))
    assert s.valid()
    assert list(s) == [Date(2025, 1, 2), Date(2024, 1, 2), Date(2023, 1, 2)]


def test_month_end_dates_measured_from_termination():
    s = schedule(Date(2023, 12, 31), Date(2024, 3, 31), "1M")
    assert list(s) == [Date(2023, 12, 31), Date(2024, 1, 31), Date(2024, 2, 29), Date(2024, 3, 31)]
    s = schedule(Date(2024, 1, 31), Date(2024, 6, 30), 1)
    assert list(s)[0] == Date(2024, 2, 29)


def test_roll_applied_to_each_date():
    s = schedule(Date(2023, 3, 30), Date(2023, 9, 30), "3M", roll="modified_following")
    assert list(s) == [Date(2023, 3, 30), Date(2023, 6, 30), Date(2023, 9, 29)]
    assert list(s.unadjusted())[-1] == Date(2023, 9, 30)


def test_roll_does_not_compound():
    s = schedule(Date(2023, 6, 30), Date(2023, 12, 31), "3M", roll="following")
    assert list(s.unadjusted()) == [Date(2023, 6, 30), Date(2023, 9, 30), Date(2023, 12, 31)]
    assert list(s) == [Date(2023, 6, 30), Date(2023, 10, 2), Date(2024, 1, 1)]
    s = Schedule(Date(2023, 6, 30), Date(2023, 12, 31), Period(3), "following", EXAMPLE)
    assert list(s)[-1] == Date(2024, 1, 2)


def test_periods():
    s = schedule(Date(2023, 1, 2), Date(2024, 1, 2), "6M")
    assert s.periods() == [
        (Date(2023, 1, 2), Date(2023, 7, 2)),
        (Date(2023, 7, 2), Date(2024, 1, 2)),
    ]


def test_as_dataframe():
    s = schedule(Date(2023, 1, 31), Date(2024, 1, 31), "6M", roll="modified_following")
    df = s.as_dataframe("30/360")
    assert list(df.columns) == ["unadjusted", "date", "accrual"]
    assert list(df["unadjusted"]) == ["2023-01-31", "2023-07-31", "2024-01-31"]
    assert math.isnan(df["accrual"].iloc[0])
    assert abs(df["accrual"].iloc[1] - 0.5) < 1e-12
    assert schedule(Date(2025, 1, 2), Date(2023, 1, 2), 12).as_dataframe().empty


def test_coupon_dates_exclude_issue():
    got = coupon_dates(Date(2023, 1, 2), Date(2025, 1, 2), 2, roll="none")
    assert got == [Date(2023, 7, 2), Date(2024, 1, 2), Date(2024, 7, 2), Date(2025, 1, 2)]
    adjusted = coupon_dates(Date(2023, 1, 2), Date(2025, 1, 2), 2)
    assert adjusted[0] == Date(2023, 7, 3)  # 2023-07-02 is a Sunday
    with pytest.raises(ValueError):
        coupon_dates(Date(2023, 1, 2), Date(2025, 1, 2), 0)


def test_negative_period_is_latest_to_earliest():
    s = schedule(Date(2025, 1, 2), Date(2023, 1, 1), "-1Y")
    dates = list(s)
    assert dates == [Date(2025, 1, 1), Date(2024, 1, 1), Date(2023, 1, 1)]
    assert dates == sorted(dates, reverse=True)
    assert dates[-1] == s.termination
    assert s.stub()
