"""
Order Statistics — Counts, values and week-over-week growth.

Backs the orders screen summary cards and its list filters.

Window policy:
    today_orders      calendar date of createdAt == calendar date of now
    this_week_orders  createdAt in [now - 7d, now)
    last_week_orders  createdAt in [now - 14d, now - 7d)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

import pandas as pd

from ..config import (
    DEFAULT_TIMEZONE,
    PAYMENT_PAID,
    PAYMENT_PENDING,
    STATUS_CANCELED,
    WEEKLY_WINDOW_DAYS,
)
from ..core.filters import filter_orders, order_search_mask
from ..core.frames import orders_frame
from ..core.windows import between, resolve_now, same_day
from ..schemas import Order, normalize_orders


def calculate_order_stats(
    orders: Iterable[Any] | None,
    now: datetime | None = None,
    tz: str = DEFAULT_TIMEZONE,
) -> dict:
    """
    Compute the order summary cards.

    Returns:
        {
          "total": 42,
          "pending": 5,              # paymentStatus == PENDING
          "completed": 30,           # paymentStatus == PAGADO
          "canceled": 2,             # status == CANCELADO
          "total_value": 12500.0,
          "avg_order_value": 297.6,  # 0 when there are no orders
          "today_orders": 3,
          "this_week_orders": 7,
          "last_week_orders": 0,
          "week_growth": 100.0       # fixed at 100 when last week is 0
        }
    """
    ref = resolve_now(now, tz)
    df = orders_frame(orders)

    total = len(df)
    total_value = float(df["total"].sum())

    created = df["created_at"]
    week = pd.Timedelta(days=WEEKLY_WINDOW_DAYS)
    this_week = int(between(created, ref - week, ref).sum())
    last_week = int(between(created, ref - 2 * week, ref - week).sum())

    return {
        "total": total,
        "pending": int((df["payment_status"] == PAYMENT_PENDING).sum()),
        "completed": int((df["payment_status"] == PAYMENT_PAID).sum()),
        "canceled": int((df["status"] == STATUS_CANCELED).sum()),
        "total_value": total_value,
        "avg_order_value": total_value / total if total > 0 else 0.0,
        "today_orders": int(same_day(created, ref).sum()),
        "this_week_orders": this_week,
        "last_week_orders": last_week,
        "week_growth": week_growth(this_week, last_week),
    }


def week_growth(this_week: int, last_week: int) -> float:
    """Percent change vs last week; 100 whenever last week had no orders."""
    if last_week == 0:
        return 100.0
    return (this_week - last_week) / last_week * 100


def search_orders(
    orders: Iterable[Any] | None,
    term: str | None = None,
    status: str | None = None,
    payment_status: str | None = None,
) -> list[Order]:
    """
    Order list filter: free-text term plus status / payment status.

    "all" or None disables a filter. Input order is preserved.
    """
    normalized = normalize_orders(orders)
    df = orders_frame(normalized)
    df = df[order_search_mask(df, term)]
    df = filter_orders(df, payment_status=payment_status, status=status)
    return [normalized[i] for i in df.index]
