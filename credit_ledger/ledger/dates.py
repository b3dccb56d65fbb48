"""Day-granularity date helpers for the ledger."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

DateLike = str | int | float | date | datetime


def to_date(value: DateLike) -> date:
    """Normalize a date-like value to a calendar date.

    Accepts ISO strings ("2018-01-01", "2018-01-01T00:00:00",
    "2018-01-01T00:00:00Z"), epoch timestamps in milliseconds (read as UTC),
    and ``date``/``datetime`` objects. Time-of-day is truncated.
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        ts = pd.Timestamp(value.strip())
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = pd.Timestamp(value, unit="ms")
    else:
        raise TypeError(f"Cannot interpret {value!r} as a date")
    if pd.isna(ts):
        raise ValueError(f"Cannot interpret {value!r} as a date")
    return ts.date()


def day_before(d: date) -> date:
    return d - timedelta(days=1)


def days_between(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (end - start).days
