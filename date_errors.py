"""
date_errors.py
Typed failures raised by the date, roll and schedule helpers.

All derive from ValueError so callers that already catch bad-input errors
keep working.
"""

from __future__ import annotations


class InvalidDateError(ValueError):
    """Year/month/day combination is not a Gregorian calendar date."""


class InvalidScheduleError(ValueError):
    """Period direction disagrees with effective -> termination."""


class UnreachableBusinessDayError(ValueError):
    """Roll adjustment found no business day within the step limit."""
