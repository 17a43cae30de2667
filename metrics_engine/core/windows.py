"""
Windows — Time-window predicates and calendar buckets.

Two policies are used, one per metric, and never mixed silently:
    - rolling windows:   multiples of 24h counted back from `now`
                         (7/30-day commissions, week growth)
    - calendar buckets:  the local calendar day / month of a timestamp
                         (today's orders, monthly trend, weekly revenue)

Calendar evaluation happens in one timezone (config.DEFAULT_TIMEZONE unless
the caller passes another). Missing timestamps (NaT) never match any window.
"""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd

from ..config import DEFAULT_TIMEZONE, MONTH_LABELS, WEEKDAY_LABELS


def resolve_now(now: datetime | pd.Timestamp | str | None, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """
    Pin the reference instant as an aware Timestamp in *tz*.

    None means "current time", read once here. Naive values are taken as
    wall-clock time in *tz*.
    """
    if now is None:
        return pd.Timestamp.now(tz=tz)
    ts = pd.Timestamp(now)
    if ts.tzinfo is None:
        return ts.tz_localize(tz)
    return ts.tz_convert(tz)


def local_times(times: pd.Series, tz: str = DEFAULT_TIMEZONE) -> pd.Series:
    """Convert an aware datetime Series to *tz*."""
    return times.dt.tz_convert(tz)


# ------------------------------------------------------------------
# Rolling windows
# ------------------------------------------------------------------

def since(times: pd.Series, now: pd.Timestamp, days: int) -> pd.Series:
    """Mask: times >= now - days*24h (no upper bound)."""
    return times >= now - pd.Timedelta(days=days)


def between(times: pd.Series, start: pd.Timestamp, end: pd.Timestamp) -> pd.Series:
    """Mask: start <= times < end."""
    return (times >= start) & (times < end)


# ------------------------------------------------------------------
# Calendar buckets
# ------------------------------------------------------------------

def same_day(times: pd.Series, now: pd.Timestamp) -> pd.Series:
    """Mask: calendar date of each timestamp equals now's date (in now's tz)."""
    local = times.dt.tz_convert(now.tz)
    return local.dt.normalize() == now.normalize()


def month_buckets(now: pd.Timestamp, months: int) -> list[tuple[int, int]]:
    """
    The last *months* calendar months ending at now's month, oldest first.

    Example (now = 2026-03-10):
        month_buckets(now, 3) -> [(2026, 1), (2026, 2), (2026, 3)]
    """
    current = now.year * 12 + (now.month - 1)
    return [divmod(current - i, 12) for i in range(months - 1, -1, -1)]


def month_index(times: pd.Series, tz: str) -> pd.Series:
    """year*12 + (month-1) of each local timestamp; NaN where missing."""
    local = times.dt.tz_convert(tz)
    return local.dt.year * 12 + (local.dt.month - 1)


def month_label(year: int, month_zero_based: int) -> str:
    """(2026, 9) -> 'oct 26'"""
    return f"{MONTH_LABELS[month_zero_based]} {year % 100:02d}"


def week_starts(now: pd.Timestamp, weeks: int) -> list[date]:
    """Start dates of *weeks* 7-day buckets ending with the one starting today, oldest first."""
    today = now.date()
    return [
        (pd.Timestamp(today) - pd.Timedelta(days=7 * i)).date()
        for i in range(weeks - 1, -1, -1)
    ]


def week_label(start: date) -> str:
    """date(2026, 10, 4) -> 'Sem 4 oct'"""
    return f"Sem {start.day} {MONTH_LABELS[start.month - 1]}"


def day_label(day: date) -> str:
    """date(2026, 10, 18) -> 'dom 18'"""
    return f"{WEEKDAY_LABELS[day.weekday()]} {day.day}"
