"""
Sales Trends — Daily sales rows, weekly revenue buckets, sale totals.

Backs the statistics screen charts and the new-sale dialog total.

Daily rows use the remote dashboard shape:
    {"date": "2026-10-18", "orders_count": 4, "total_revenue": 512.0}
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Iterable

import pandas as pd

from ..config import DEFAULT_TIMEZONE, RECENT_DAYS, TREND_WEEKS
from ..core.cleaning import to_int, to_number
from ..core.frames import orders_frame
from ..core.windows import day_label, resolve_now, week_label, week_starts
from ..schemas import normalize_order_items


def daily_sales_from_orders(
    orders: Iterable[Any] | None,
    tz: str = DEFAULT_TIMEZONE,
) -> list[dict]:
    """
    Aggregate orders into one row per local calendar day, oldest first.

    Orders without createdAt are left out.
    """
    df = orders_frame(orders)
    df = df[df["created_at"].notna()]
    if df.empty:
        return []

    days = df["created_at"].dt.tz_convert(tz).dt.strftime("%Y-%m-%d")
    grouped = df.groupby(days).agg(
        orders_count=("total", "count"),
        total_revenue=("total", "sum"),
    )
    return [
        {
            "date": day,
            "orders_count": int(row["orders_count"]),
            "total_revenue": float(row["total_revenue"]),
        }
        for day, row in grouped.sort_index().iterrows()
    ]


def recent_daily_orders(daily_sales: Iterable[dict] | None, days: int = RECENT_DAYS) -> list[dict]:
    """
    Last *days* daily rows as chart points.

    Returns:
        [{"date": "2026-10-18", "label": "dom 18", "sales": 4}, ...]
    """
    if days <= 0:
        return []

    points = []
    for row in _clean_daily(daily_sales)[-days:]:
        points.append({
            "date": row["date"].isoformat(),
            "label": day_label(row["date"]),
            "sales": row["orders_count"],
        })
    return points


def weekly_revenue_trend(
    daily_sales: Iterable[dict] | None,
    now: datetime | None = None,
    weeks: int = TREND_WEEKS,
    tz: str = DEFAULT_TIMEZONE,
) -> list[dict]:
    """
    Revenue per 7-day bucket, oldest first.

    Bucket i starts at today - i*7 days and covers start..start+6 days
    (dates inclusive), so the newest bucket starts today.

    Returns:
        [{"label": "Sem 6 sept", "week_start": "2026-09-06", "revenue": 1520.0}, ...]
    """
    ref = resolve_now(now, tz)
    rows = _clean_daily(daily_sales)

    trend = []
    for start in week_starts(ref, weeks):
        end = start + timedelta(days=6)
        revenue = sum(r["total_revenue"] for r in rows if start <= r["date"] <= end)
        trend.append({
            "label": week_label(start),
            "week_start": start.isoformat(),
            "revenue": float(revenue),
        })
    return trend


def summarize_daily_sales(daily_sales: Iterable[dict] | None) -> dict:
    """
    Totals for the statistics cards.

    Returns:
        {"days": 30, "total_sales": 96, "total_revenue": 15420.0, "avg_daily_sales": 3.2}
    """
    rows = _clean_daily(daily_sales)
    total_sales = sum(r["orders_count"] for r in rows)
    return {
        "days": len(rows),
        "total_sales": total_sales,
        "total_revenue": float(sum(r["total_revenue"] for r in rows)),
        "avg_daily_sales": total_sales / len(rows) if rows else 0.0,
    }


def order_items_total(items: Iterable[Any] | None) -> float:
    """Sum of price * quantity over sale line items."""
    return float(sum(item.price * item.quantity for item in normalize_order_items(items)))


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _clean_daily(daily_sales: Iterable[dict] | None) -> list[dict]:
    """Parse daily rows, drop rows without a usable date, sort by date."""
    rows = []
    for raw in daily_sales or []:
        if not isinstance(raw, dict):
            continue
        parsed = pd.to_datetime(raw.get("date"), errors="coerce")
        if pd.isna(parsed):
            continue
        rows.append({
            "date": parsed.date(),
            "orders_count": to_int(raw.get("orders_count")),
            "total_revenue": to_number(raw.get("total_revenue")),
        })
    rows.sort(key=lambda r: r["date"])
    return rows
