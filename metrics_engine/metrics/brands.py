"""
Brand Analytics — Product count, stock value and average price per brand.

Backs the brands screen and its sort selector.

Brands come from the brands endpoint when given, so brands without products
still appear with zero counts; otherwise they are derived from the products.
Products are matched to a brand by id, falling back to name when the product
only carries a brand name.
"""

from __future__ import annotations

from typing import Any, Iterable

import pandas as pd

from ..core.frames import products_frame
from ..schemas import normalize_brands


SORT_OPTIONS = ("name", "products", "value")


def calculate_brand_metrics(
    products: Iterable[Any] | None,
    brands: Iterable[Any] | None = None,
    sort_by: str = "name",
) -> dict:
    """
    Compute per-brand stats for the brands screen.

    Args:
        products: Raw product dicts or schemas.Product models.
        brands:   Optional brand list from the brands endpoint.
        sort_by:  "name" (A-Z, case-insensitive), "products" or "value"
                  (both descending). Ties keep input order.

    Returns:
        {
          "total_brands": 12,
          "total_products": 140,
          "total_value": 58200.0,
          "brands": [
            {"id": 3, "name": "Acme", "description": None,
             "product_count": 14, "total_value": 9100.0, "average_price": 65.0},
            ...
          ]
        }
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort_by: '{sort_by}'. Use one of {list(SORT_OPTIONS)}")

    df = products_frame(products)
    df = df.assign(value=df["price"] * df["stock"])

    if brands is not None:
        catalog = [
            {"id": b.id, "name": b.name, "description": b.description}
            for b in normalize_brands(brands)
        ]
    else:
        catalog = _brands_from_products(df)

    rows: list[dict] = []
    for brand in catalog:
        subset = df[_brand_mask(df, brand)]
        count = len(subset)
        rows.append({
            "id": brand["id"],
            "name": brand["name"],
            "description": brand["description"],
            "product_count": count,
            "total_value": float(subset["value"].sum()),
            "average_price": float(subset["price"].sum()) / count if count > 0 else 0.0,
        })

    return {
        "total_brands": len(rows),
        "total_products": sum(r["product_count"] for r in rows),
        "total_value": float(sum(r["total_value"] for r in rows)),
        "brands": _sort_brands(rows, sort_by),
    }


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _brands_from_products(df: pd.DataFrame) -> list[dict]:
    """Distinct brands in first-seen order, keyed by id (or name when id is missing)."""
    seen: dict[Any, dict] = {}
    for brand_id, brand_name in zip(df["brand_id"], df["brand_name"]):
        if brand_id is None and brand_name is None:
            continue
        key = ("id", brand_id) if brand_id is not None else ("name", brand_name)
        if key not in seen:
            seen[key] = {"id": brand_id, "name": brand_name, "description": None}
    return list(seen.values())


def _brand_mask(df: pd.DataFrame, brand: dict) -> pd.Series:
    if brand["id"] is not None:
        by_id = df["brand_id"] == brand["id"]
        by_name = df["brand_id"].isna() & (df["brand_name"] == brand["name"])
        return (by_id | by_name).astype(bool)
    return (df["brand_id"].isna() & (df["brand_name"] == brand["name"])).astype(bool)


def _sort_brands(rows: list[dict], sort_by: str) -> list[dict]:
    if sort_by == "products":
        return sorted(rows, key=lambda r: r["product_count"], reverse=True)
    if sort_by == "value":
        return sorted(rows, key=lambda r: r["total_value"], reverse=True)
    return sorted(rows, key=lambda r: (r["name"] or "").casefold())
