"""Timezone and calendar utilities for the user's local time."""

from datetime import date, datetime
from typing import Optional

import pytz
from dateutil.relativedelta import relativedelta

LOCAL_TZ = pytz.timezone("Europe/Rome")


def now_local() -> datetime:
    """Return current time in the local timezone."""
    return datetime.now(LOCAL_TZ)


def today_local() -> date:
    """Return today's date in the local timezone."""
    return now_local().date()


def add_months(value: date, months: int, day: Optional[int] = None) -> date:
    """
    Shift a date by a number of months.

    When `day` is given it is used as the target day of month, clamped to the
    last day of the resulting month (e.g. day 31 in February gives the 28th/29th).
    """
    shifted = value + relativedelta(months=months)
    if day is None:
        return shifted
    return shifted + relativedelta(day=day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    prev = date(year, month, 1) - relativedelta(months=1)
    return prev.year, prev.month
