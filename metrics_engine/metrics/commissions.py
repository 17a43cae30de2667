"""
Commission & Earnings Metrics — Platform cut over processed orders.

Backs the earnings screen and the payment approval dialog.
Commission = order total * rate. Nothing is rounded here; display formatting
is the caller's concern.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

import pandas as pd

from ..config import (
    COMMISSION_RATE,
    COMMISSION_SELLER_ROLES,
    DEFAULT_TIMEZONE,
    INTERNAL_TRANSFER,
    MONTHLY_WINDOW_DAYS,
    RECENT_COMMISSIONS_LIMIT,
    TOP_N,
    TREND_MONTHS,
    WEEKLY_WINDOW_DAYS,
)
from ..core.cleaning import native, to_number
from ..core.filters import filter_orders
from ..core.frames import orders_frame
from ..core.ranking import rank_top
from ..core.windows import month_buckets, month_index, month_label, resolve_now, since
from ..schemas import Order, normalize_orders


def calculate_commission_metrics(
    orders: Iterable[Any] | None,
    now: datetime | None = None,
    rate: float = COMMISSION_RATE,
    payment_status: str | None = None,
    payment_method: str | None = None,
    seller_role: str | Iterable[str] | None = None,
    tz: str = DEFAULT_TIMEZONE,
    top_n: int = TOP_N,
    recent_limit: int = RECENT_COMMISSIONS_LIMIT,
    trend_months: int = TREND_MONTHS,
) -> dict:
    """
    Compute commission totals, top sellers, recent commissions and trend.

    Args:
        orders:         Raw order dicts or schemas.Order models.
        now:            Reference instant (None = current time).
        rate:           Commission rate applied to each order total.
        payment_status: Only orders with this payment status.
        payment_method: Only orders paid with this method.
        seller_role:    Only orders whose seller has this role (or one of
                        these roles). Orders without seller are dropped.
        tz:             Timezone for calendar-month buckets.

    Returns:
        {
          "commission_rate": 0.1,
          "total_commissions": 35.0,
          "monthly_commissions": 20.0,     # createdAt >= now - 30d
          "weekly_commissions": 5.0,       # createdAt >= now - 7d
          "total_processed_orders": 3,
          "top_selling_admins": [
            {"admin": {"id": 1, "name": "A", "email": "a@x", "role": "admin"},
             "total_sales": 300.0, "commission": 30.0, "orders_count": 2},
            ...
          ],
          "recent_commissions": [
            {"order_id": 3, "order_number": "#3", "seller_name": "B",
             "order_total": 50.0, "commission": 5.0,
             "processed_at": "2026-10-01T10:00:00+00:00"},
            ...
          ],
          "monthly_trend": [
            {"month": "may 26", "month_start": "2026-05-01",
             "commissions": 0.0, "orders": 0},
            ...
          ]
        }
    """
    ref = resolve_now(now, tz)
    df = filter_orders(
        orders_frame(orders),
        payment_status=payment_status,
        payment_method=payment_method,
        seller_role=seller_role,
    )
    df = df.assign(commission=df["total"] * rate)

    created = df["created_at"]
    monthly_mask = since(created, ref, MONTHLY_WINDOW_DAYS)
    weekly_mask = since(created, ref, WEEKLY_WINDOW_DAYS)

    return {
        "commission_rate": rate,
        "total_commissions": float(df["commission"].sum()),
        "monthly_commissions": float(df.loc[monthly_mask, "commission"].sum()),
        "weekly_commissions": float(df.loc[weekly_mask, "commission"].sum()),
        "total_processed_orders": len(df),
        "top_selling_admins": _top_selling_admins(df, top_n),
        "recent_commissions": _recent_commissions(df, recent_limit),
        "monthly_trend": _monthly_trend(df, ref, tz, trend_months),
    }


def commission_orders(
    orders: Iterable[Any] | None,
    seller_roles: Iterable[str] = COMMISSION_SELLER_ROLES,
    payment_method: str = INTERNAL_TRANSFER,
) -> list[Order]:
    """
    Orders that generate a platform commission (sales screen list).

    A seller with one of *seller_roles* and payment by *payment_method*.
    """
    normalized = normalize_orders(orders)
    df = filter_orders(
        orders_frame(normalized),
        payment_method=payment_method,
        seller_role=tuple(seller_roles),
    )
    return [normalized[i] for i in df.index]


def payment_split(order: Any, rate: float = COMMISSION_RATE) -> dict:
    """
    Split one order total between the platform and the seller.

    Returns:
        {"order_total": 250.0, "commission": 25.0, "seller_payment": 225.0}
    """
    if isinstance(order, Order):
        total = order.total
    elif isinstance(order, dict):
        total = to_number(order.get("total"))
    else:
        total = to_number(order)

    return {
        "order_total": total,
        "commission": total * rate,
        "seller_payment": total * (1 - rate),
    }


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _top_selling_admins(df: pd.DataFrame, top_n: int) -> list[dict]:
    ranked = rank_top(
        df,
        key="seller_id",
        aggregations={
            "id": ("seller_id", "first"),
            "name": ("seller_name", "first"),
            "email": ("seller_email", "first"),
            "role": ("seller_role", "first"),
            "total_sales": ("total", "sum"),
            "commission": ("commission", "sum"),
            "orders_count": ("total", "count"),
        },
        sort_by="commission",
        top_n=top_n,
    )
    return [
        {
            "admin": {
                "id": row["id"],
                "name": row["name"],
                "email": row["email"],
                "role": row["role"],
            },
            "total_sales": row["total_sales"],
            "commission": row["commission"],
            "orders_count": row["orders_count"],
        }
        for row in ranked
    ]


def _recent_commissions(df: pd.DataFrame, limit: int) -> list[dict]:
    if limit <= 0:
        return []

    recent = []
    for row in df.tail(limit).itertuples(index=False):
        processed = row.updated_at if not pd.isna(row.updated_at) else row.created_at
        recent.append({
            "order_id": native(row.id),
            "order_number": row.order_number or f"#{row.id}",
            "seller_name": row.seller_name or "N/A",
            "order_total": float(row.total),
            "commission": float(row.commission),
            "processed_at": native(processed),
        })
    recent.reverse()
    return recent


def _monthly_trend(df: pd.DataFrame, now: pd.Timestamp, tz: str, months: int) -> list[dict]:
    index = month_index(df["created_at"], tz)

    trend = []
    for year, month in month_buckets(now, months):
        mask = index == year * 12 + month
        trend.append({
            "month": month_label(year, month),
            "month_start": f"{year:04d}-{month + 1:02d}-01",
            "commissions": float(df.loc[mask, "commission"].sum()),
            "orders": int(mask.sum()),
        })
    return trend
