"""
Top Customers & Sellers — Group-by-email rankings for the orders screen.

Backs the orders screen side panels.

Seller earnings accumulate total * SELLER_EARNINGS_SHARE (0.9). That share
is its own business constant and is not derived from COMMISSION_RATE.
"""

from __future__ import annotations

from typing import Any, Iterable

from ..config import SELLER_EARNINGS_SHARE, TOP_N
from ..core.frames import orders_frame
from ..core.ranking import rank_top


def calculate_top_customers(orders: Iterable[Any] | None, top_n: int = TOP_N) -> list[dict]:
    """
    Rank customers by money spent.

    Returns:
        [
          {"name": "Ana", "email": "ana@x", "order_count": 3, "total_spent": 420.0},
          ...
        ]
    """
    df = orders_frame(orders)
    return rank_top(
        df,
        key="customer_email",
        aggregations={
            "name": ("customer_name", "first"),
            "email": ("customer_email", "first"),
            "order_count": ("total", "count"),
            "total_spent": ("total", "sum"),
        },
        sort_by="total_spent",
        top_n=top_n,
    )


def calculate_top_sellers(
    orders: Iterable[Any] | None,
    top_n: int = TOP_N,
    earnings_share: float = SELLER_EARNINGS_SHARE,
) -> list[dict]:
    """
    Rank sellers by their share of the order totals.

    Orders without a seller are left out.

    Returns:
        [
          {"name": "Luis", "email": "luis@x", "sales_count": 2, "total_earnings": 270.0},
          ...
        ]
    """
    df = orders_frame(orders)
    df = df.assign(earnings=df["total"] * earnings_share)
    return rank_top(
        df,
        key="seller_email",
        aggregations={
            "name": ("seller_name", "first"),
            "email": ("seller_email", "first"),
            "sales_count": ("total", "count"),
            "total_earnings": ("earnings", "sum"),
        },
        sort_by="total_earnings",
        top_n=top_n,
    )
