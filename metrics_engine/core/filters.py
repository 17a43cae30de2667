"""
Filters — Order and product predicates used by the admin screens.

Pure data logic. Takes a frame from core.frames plus filter values and
returns a boolean mask (or the filtered frame). A filter value of None or
"all" disables that filter.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from ..config import LOW_STOCK_THRESHOLD


_DISABLED = (None, "", "all")


def _is_disabled(value) -> bool:
    return value is None or (isinstance(value, str) and value in _DISABLED)


def _as_set(value: str | Iterable[str]) -> set[str]:
    if isinstance(value, str):
        return {value}
    return set(value)


def filter_orders(
    df: pd.DataFrame,
    payment_status: str | None = None,
    payment_method: str | None = None,
    seller_role: str | Iterable[str] | None = None,
    status: str | None = None,
) -> pd.DataFrame:
    """
    Keep orders matching every active filter, preserving input order.

    Args:
        df:             Output of core.frames.orders_frame.
        payment_status: e.g. "PAGADO".
        payment_method: e.g. "TRANSFERENCIA_INTERNA".
        seller_role:    One role or a collection of accepted roles. Orders
                        without a seller never match a role filter.
        status:         Order status, e.g. "CANCELADO".
    """
    mask = pd.Series(True, index=df.index, dtype=bool)

    if not _is_disabled(payment_status):
        mask &= df["payment_status"] == payment_status
    if not _is_disabled(payment_method):
        mask &= df["payment_method"] == payment_method
    if not _is_disabled(status):
        mask &= df["status"] == status
    if seller_role is not None and not _is_disabled(seller_role):
        mask &= df["seller_role"].isin(_as_set(seller_role))

    return df[mask]


def order_search_mask(df: pd.DataFrame, term: str | None) -> pd.Series:
    """Order id substring, or customer name / email containing *term* (case-insensitive)."""
    if not term:
        return pd.Series(True, index=df.index, dtype=bool)

    needle = term.lower()
    ids = df["id"].map(lambda v: v is not None and term in str(v))
    names = df["customer_name"].map(lambda v: v is not None and needle in v.lower())
    emails = df["customer_email"].map(lambda v: v is not None and needle in v.lower())
    return (ids | names | emails).astype(bool)


def product_filter_mask(
    df: pd.DataFrame,
    search: str | None = None,
    category: str | None = None,
    stock_filter: str | None = None,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> pd.Series:
    """
    Product list filter.

    search:       name, brand name or description containing the term
    category:     exact category name ("all" disables)
    stock_filter: "lowstock" (stock < threshold) or "outofstock" (stock == 0)
    """
    mask = pd.Series(True, index=df.index, dtype=bool)

    if search:
        needle = search.lower()

        def _contains(v) -> bool:
            return v is not None and needle in str(v).lower()

        mask &= (
            df["name"].map(_contains)
            | df["brand_name"].map(_contains)
            | df["description"].map(_contains)
        ).astype(bool)

    if not _is_disabled(category):
        mask &= df["category_name"] == category

    if stock_filter == "lowstock":
        mask &= df["stock"] < threshold
    elif stock_filter == "outofstock":
        mask &= df["stock"] == 0

    return mask
