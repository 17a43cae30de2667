"""
Ranking — Group-and-rank primitive and stock urgency tiers.

Top-N rankings on every screen follow the same recipe:
    group rows by a key (rows with a missing key are left out)
    -> accumulate per group, groups kept in first-seen order
    -> stable descending sort on a monetary total
    -> truncate to N
Stability means ties keep first-seen order.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..config import TOP_N, URGENCY_LEVELS
from .cleaning import to_records


def rank_top(
    df: pd.DataFrame,
    key: str,
    aggregations: dict[str, tuple[str, str]],
    sort_by: str,
    top_n: int = TOP_N,
) -> list[dict]:
    """
    Group *df* by *key*, aggregate, and return the top *top_n* groups.

    Args:
        df:           Frame to rank (already filtered).
        key:          Grouping column; None / NaN keys are excluded.
        aggregations: Named aggregations, {out_col: (in_col, func)}.
        sort_by:      Output column to sort on, descending.
        top_n:        Number of groups to keep.

    Returns:
        List of dicts, one per group, best first.

    Example:
        rank_top(df, "customer_email",
                 {"total_spent": ("total", "sum"),
                  "order_count": ("total", "count")},
                 sort_by="total_spent")
    """
    if df.empty or top_n <= 0:
        return []

    # group on a copy of the key so the key column itself stays aggregatable
    keyed = df.assign(_group_key=df[key])
    grouped = keyed.groupby("_group_key", sort=False, dropna=True).agg(**aggregations)
    if grouped.empty:
        return []

    ranked = grouped.sort_values(sort_by, ascending=False, kind="stable")
    return to_records(ranked.head(top_n).reset_index(drop=True))


# ------------------------------------------------------------------
# Stock urgency
# ------------------------------------------------------------------

URGENCY_RANK = {level: i for i, level in enumerate(URGENCY_LEVELS)}


def categorize_urgency(stock: pd.Series) -> pd.Series:
    """
    Urgency tier per stock level, using np.select buckets.

        stock <= 3      -> critical   (includes out of stock)
        4 <= stock <= 6 -> warning
        otherwise       -> low
    """
    conditions = [
        stock <= 3,
        (stock > 3) & (stock <= 6),
    ]
    levels = np.select(conditions, URGENCY_LEVELS[:2], default=URGENCY_LEVELS[2])
    return pd.Series(levels, index=stock.index, dtype=object)


def restock_suggestion(stock: pd.Series) -> pd.Series:
    """
    Suggested replenishment quantity per stock level.

        stock == 0      -> 50
        stock <= 3      -> max(25, stock * 8)
        4 <= stock <= 6 -> max(20, stock * 5)
        otherwise       -> max(15, stock * 3)
    """
    conditions = [
        stock == 0,
        stock <= 3,
        (stock > 3) & (stock <= 6),
    ]
    choices = [
        np.full(len(stock), 50),
        np.maximum(25, stock * 8),
        np.maximum(20, stock * 5),
    ]
    values = np.select(conditions, choices, default=np.maximum(15, stock * 3))
    return pd.Series(values, index=stock.index, dtype="int64")
